"""
Booking scenarios.

Both scenarios create a booking whose references carry the run's token and
hand the new booking id off under latest-booking-id for the tracking group.
"""

import logging

from harness.data.factories import make_booking_data, make_multi_trip_booking_data
from harness.pages.booking_page import BookingPage
from harness.scenarios.common import SIGN_IN
from harness.services.handoff_store import HandoffKey
from harness.services.scenario_runner import Scenario, ScenarioContext

logger = logging.getLogger(__name__)

GROUP = "booking"


def fill_booking_form(ctx: ScenarioContext) -> None:
    data = make_booking_data(ctx.token)
    ctx.values["booking"] = data
    BookingPage(ctx.surface, ctx.waits).create_booking(data)


def fill_multi_trip_booking_form(ctx: ScenarioContext) -> None:
    data = make_multi_trip_booking_data(ctx.token)
    ctx.values["booking"] = data
    BookingPage(ctx.surface, ctx.waits).create_booking(data)


def add_second_trip(ctx: ScenarioContext) -> None:
    page = BookingPage(ctx.surface, ctx.waits)
    page.fill_job_remarks(0, "Job #1 - Single additional trip test")
    page.fill_trip_remarks(1, "Trip #1: Warehouse -> Customer A")
    trip_number = page.add_trip()
    page.fill_trip_remarks(trip_number, f"Trip #{trip_number}: Customer A -> Customer B")


def submit_booking(ctx: ScenarioContext) -> None:
    ctx.values["booking_id"] = BookingPage(ctx.surface, ctx.waits).submit_booking()


def verify_booking(ctx: ScenarioContext) -> None:
    BookingPage(ctx.surface, ctx.waits).verify_booking_exists(ctx.values["booking_id"])


def hand_off_booking_id(ctx: ScenarioContext) -> None:
    booking_id = ctx.values["booking_id"]
    ctx.store.save(HandoffKey.LATEST_BOOKING_ID, booking_id)
    logger.info(f"Booking {booking_id} (ref {ctx.values['booking'].shipper_ref}) handed off")


CREATE_BOOKING = Scenario(
    name="create_booking",
    group=GROUP,
    description="Create and submit a single-job booking, then hand off its id",
    steps=[
        SIGN_IN,
        ("fill booking form", fill_booking_form),
        ("submit booking", submit_booking),
        ("verify booking exists", verify_booking),
        ("hand off booking id", hand_off_booking_id),
    ],
)

CREATE_BOOKING_WITH_TWO_TRIPS = Scenario(
    name="create_booking_with_two_trips",
    group=GROUP,
    description="Create a booking with one job and two trips, then hand off its id",
    steps=[
        SIGN_IN,
        ("fill booking form", fill_multi_trip_booking_form),
        ("add second trip", add_second_trip),
        ("submit booking", submit_booking),
        ("verify booking exists", verify_booking),
        ("hand off booking id", hand_off_booking_id),
    ],
)

SCENARIOS = [CREATE_BOOKING, CREATE_BOOKING_WITH_TWO_TRIPS]
