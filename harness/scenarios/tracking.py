"""
Tracking scenarios.

These run against the booking handed off by the booking group, in a separate
process and session. Without that handoff they fail on their first data step
with a MissingStateError naming booking/create_booking.
"""

from collections.abc import Callable

from selenium.common.exceptions import TimeoutException

from harness.data.factories import (
    CANCEL_SHIFT_DRIVER,
    LEG_DRIVER,
    LEG_VEHICLE,
    make_job_data,
    make_leg_data,
    make_trip_data,
)
from harness.errors import VerificationError
from harness.models.schemas import LegData, LegStatus
from harness.pages.tracking_page import TrackingPage
from harness.scenarios.common import SIGN_IN
from harness.services.handoff_store import HandoffKey
from harness.services.scenario_runner import Scenario, ScenarioContext

GROUP = "tracking"


def load_booking_id(ctx: ScenarioContext) -> None:
    ctx.values["booking_id"] = ctx.store.require(HandoffKey.LATEST_BOOKING_ID)


def open_booking(ctx: ScenarioContext) -> None:
    TrackingPage(ctx.surface, ctx.waits).navigate_to_booking(ctx.values["booking_id"])


def accept_and_sync(ctx: ScenarioContext) -> None:
    page = TrackingPage(ctx.surface, ctx.waits)
    page.accept_booking()
    page.reload()
    page.sync()


def add_job_and_trip(ctx: ScenarioContext) -> None:
    page = TrackingPage(ctx.surface, ctx.waits)
    jobs_before = page.job_count()
    ctx.values["jobs_before"] = jobs_before
    page.add_job(make_job_data(ctx.token))
    page.add_trip(make_trip_data(ctx.token), job_index=jobs_before)


def verify_job_added(ctx: ScenarioContext) -> None:
    page = TrackingPage(ctx.surface, ctx.waits)
    jobs_before = ctx.values["jobs_before"]
    try:
        page.waits.wait_until(lambda: page.job_count() > jobs_before, description="new job section")
    except TimeoutException:
        raise VerificationError(f"No job was added: the booking still lists {page.job_count()} job(s)")


def rejected_leg_step(leg: LegData, submit: Callable[[TrackingPage], bool], rule: str):
    """Step that fills a new leg, expects submit to show a validation error, then discards the leg."""

    def check_rejected(ctx: ScenarioContext) -> None:
        page = TrackingPage(ctx.surface, ctx.waits)
        page.open_leg_for_creation(1)
        page.assign_leg_resources(leg)
        rejected = submit(page)
        page.cancel_leg_edit()
        if not rejected:
            raise VerificationError(f"Leg was accepted {rule}")

    return check_rejected


def assign_driver_and_vehicle(ctx: ScenarioContext) -> None:
    page = TrackingPage(ctx.surface, ctx.waits)
    leg = make_leg_data()
    ctx.values["leg"] = leg
    page.open_first_leg()
    page.sync_open_dialog("leg")
    page.assign_leg_resources(leg)
    page.submit_leg()
    page.close_leg_dialog()


def stamp_timeline(ctx: ScenarioContext) -> None:
    page = TrackingPage(ctx.surface, ctx.waits)
    trip_dialog = page.sync_open_dialog("trip")
    page.open_first_leg(within=trip_dialog)
    page.update_leg_timeline(ctx.values["leg"])
    page.close_leg_dialog()
    page.sync()


def create_leg_without_end_out(ctx: ScenarioContext) -> None:
    page = TrackingPage(ctx.surface, ctx.waits)
    page.open_leg_for_creation(1)
    leg = make_leg_data(end_out=False)
    page.assign_leg_resources(leg)
    page.update_leg_timeline(leg)
    page.submit_leg()


def complete_leg_timeline(ctx: ScenarioContext) -> None:
    page = TrackingPage(ctx.surface, ctx.waits)
    page.edit_leg(1)
    page.update_leg_timeline(LegData(end_out=True))
    page.submit_leg()


def expect_leg_status(status: LegStatus, leg_number: int = 1):
    def verify_leg(ctx: ScenarioContext) -> None:
        try:
            TrackingPage(ctx.surface, ctx.waits).verify_leg_status(leg_number, status.value)
        except TimeoutException:
            raise VerificationError(f"Leg #{leg_number} never showed status {status.value}")

    return verify_leg


def expect_job_status(status: LegStatus, job_number: int = 1):
    def verify_job(ctx: ScenarioContext) -> None:
        try:
            TrackingPage(ctx.surface, ctx.waits).verify_job_status(job_number, status.value)
        except TimeoutException:
            raise VerificationError(f"Job #{job_number} never showed status {status.value}")

    return verify_job


def change_driver_then_cancel(ctx: ScenarioContext) -> None:
    page = TrackingPage(ctx.surface, ctx.waits)
    ctx.values["original_leg_text"] = page.leg_row_text(1)
    page.edit_leg(1)
    page.assign_leg_resources(LegData(driver=CANCEL_SHIFT_DRIVER))
    page.cancel_leg_edit()


def verify_leg_unchanged(ctx: ScenarioContext) -> None:
    text = TrackingPage(ctx.surface, ctx.waits).leg_row_text(1)
    if CANCEL_SHIFT_DRIVER in text and CANCEL_SHIFT_DRIVER not in ctx.values["original_leg_text"]:
        raise VerificationError(f"Cancelled driver change was saved: leg #1 now shows {CANCEL_SHIFT_DRIVER}")


LOAD_AND_OPEN_BOOKING = [
    SIGN_IN,
    ("load handed-off booking id", load_booking_id),
    ("open booking", open_booking),
]

ADD_JOB_AND_TRIP = Scenario(
    name="add_job_and_trip",
    group=GROUP,
    description="Add a job with one trip to the handed-off booking",
    steps=[
        *LOAD_AND_OPEN_BOOKING,
        ("add job and trip", add_job_and_trip),
        ("verify job added", verify_job_added),
    ],
)

VALIDATE_LEG_RULES = Scenario(
    name="validate_leg_rules",
    group=GROUP,
    description="A new leg is rejected without a driver, without a vehicle, or ending before it starts",
    steps=[
        *LOAD_AND_OPEN_BOOKING,
        (
            "reject leg without driver",
            rejected_leg_step(
                LegData(vehicle=LEG_VEHICLE), TrackingPage.attempt_submit_without_driver, "without a driver"
            ),
        ),
        (
            "reject leg without vehicle",
            rejected_leg_step(
                LegData(driver=LEG_DRIVER), TrackingPage.attempt_submit_without_vehicle, "without a vehicle"
            ),
        ),
        (
            "reject end before start",
            rejected_leg_step(
                LegData(driver=LEG_DRIVER, vehicle=LEG_VEHICLE),
                lambda page: page.attempt_invalid_time_range("10:00", "09:00"),
                "with its end before its start",
            ),
        ),
    ],
)

UPDATE_LEGS = Scenario(
    name="update_legs",
    group=GROUP,
    description="Accept the handed-off booking, assign the first leg, stamp its timeline and check it completed",
    steps=[
        *LOAD_AND_OPEN_BOOKING,
        ("accept and sync booking", accept_and_sync),
        ("assign driver and vehicle", assign_driver_and_vehicle),
        ("stamp leg timeline", stamp_timeline),
        ("verify leg completed", expect_leg_status(LegStatus.COMPLETED)),
    ],
)

CANCEL_LEG_EDIT = Scenario(
    name="cancel_leg_edit",
    group=GROUP,
    description="Change the first leg's driver and close without saving",
    steps=[
        *LOAD_AND_OPEN_BOOKING,
        ("change driver then cancel", change_driver_then_cancel),
        ("verify leg unchanged", verify_leg_unchanged),
    ],
)

LEG_STATUS_TRANSITIONS = Scenario(
    name="leg_status_transitions",
    group=GROUP,
    description="A leg is PENDING until its timeline is complete, then it and its job are COMPLETED",
    steps=[
        *LOAD_AND_OPEN_BOOKING,
        ("create leg without end-out time", create_leg_without_end_out),
        ("verify leg pending", expect_leg_status(LegStatus.PENDING)),
        ("complete leg timeline", complete_leg_timeline),
        ("verify leg completed", expect_leg_status(LegStatus.COMPLETED)),
        ("verify job completed", expect_job_status(LegStatus.COMPLETED)),
    ],
)

# Order matters: the status checks need a first leg that is not yet completed.
SCENARIOS = [ADD_JOB_AND_TRIP, VALIDATE_LEG_RULES, LEG_STATUS_TRANSITIONS, UPDATE_LEGS, CANCEL_LEG_EDIT]
