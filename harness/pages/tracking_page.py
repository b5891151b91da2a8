"""
Booking tracking page object.

Covers the operations on an existing booking: accepting it, adding jobs and
trips, opening legs, assigning driver and vehicle, stamping the leg timeline,
and reading leg/job status back.
"""

import logging
import re
from typing import Any

from selenium.common.exceptions import TimeoutException

from harness.models.schemas import BookingTrackingState, JobData, LegData, LegStatus, TripData
from harness.pages.base_page import BasePage
from harness.providers.dom_schema import DOM, by_id
from harness.providers.retry import retry_call

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_SECONDS = 5.0
VALIDATION_TIMEOUT_SECONDS = 2.0

DRIVER_MISSING_PATTERN = r"driver|required"
VEHICLE_MISSING_PATTERN = r"vehicle|required"
TIME_ORDER_PATTERN = r"end.*before|time.*order"


class TrackingPage(BasePage):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.state = BookingTrackingState(booking_id="")

    def navigate_to_booking(self, booking_id: str) -> None:
        self.state = BookingTrackingState(booking_id=booking_id)
        self.goto(DOM.TRACKING.booking_path_template.format(booking_id=booking_id))
        logger.info(f"Navigated to booking: {booking_id}")

    def accept_booking(self) -> bool:
        """
        Accept the booking if it is still waiting for acceptance.

        Returns:
            True if the Accept button was clicked, False if the booking was already accepted.
        """
        if not self.is_visible(DOM.TRACKING.accept_button):
            logger.info(f"Booking {self.state.booking_id} already accepted")
            return False
        self.click(DOM.TRACKING.accept_button)
        if self.is_visible(DOM.MODAL.confirm_yes):
            self.modals.confirm()
        self.waits.wait_for_hidden(self.surface, DOM.TRACKING.accept_button)
        logger.info(f"Booking {self.state.booking_id} accepted")
        return True

    def reload(self) -> None:
        self.surface.reload()
        self.wait_for_page_load()

    def sync(self) -> None:
        """Click the page-level sync button; it re-renders while syncing."""
        retry_call(
            lambda: self.click(DOM.TRACKING.sync_button), description="click sync", deadline=self.waits.deadline
        )

    def add_job(self, job: JobData) -> None:
        logger.info("Adding new job...")
        form = DOM.BOOKING_FORM
        self.click(DOM.LEGACY.add_job_button)
        self.dropdowns.open_and_select(form.job_type, job.job_type, search=job.job_type[:5])
        self.dropdowns.open_and_select(form.measurement_type, job.measurement_type, search=job.measurement_type[:3])
        self.fill(form.quantity, job.quantity)
        self.dropdowns.open_and_select(form.uom, job.uom, search=job.uom[:3])
        if job.remarks:
            self.fill(DOM.TRACKING.job_remarks_input, job.remarks)
        logger.info("Job added")

    def add_trip(self, trip: TripData, job_index: int = 0) -> None:
        logger.info(f"Adding trip to job #{job_index + 1}...")
        form = DOM.BOOKING_FORM
        self.click(form.add_trip_button)
        self.dropdowns.open_and_select(form.from_company, trip.from_company, search=trip.from_company[:5])
        self.dropdowns.open_and_select(form.to_company, trip.to_company, search=trip.to_company[:5])
        if trip.remarks:
            self.fill(DOM.TRACKING.trip_remarks_input, trip.remarks)
        logger.info("Trip added")

    def job_count(self) -> int:
        return len(self.surface.find_all(DOM.TRACKING.job_sections))

    def _leg_row(self, leg_number: int) -> Any:
        return self.wait_for_element(by_id(DOM.TRACKING.leg_row_template.format(index=leg_number - 1)))

    def open_leg(self, leg_number: int = 1) -> Any:
        """Click the leg's row button and return the dialog it opens."""
        row = self._leg_row(leg_number)
        button = self.waits.wait_for_element(
            self.surface, DOM.TRACKING.leg_row_button, condition="enabled", within=row
        )
        self.surface.click(button)
        modal = self.modals.wait_for_modal()
        logger.info(f"Leg #{leg_number} opened")
        return modal

    def open_leg_for_creation(self, leg_number: int = 1) -> Any:
        return self.open_leg(leg_number)

    def edit_leg(self, leg_number: int) -> Any:
        logger.info(f"Opening leg #{leg_number} for editing...")
        return self.open_leg(leg_number)

    def open_first_leg(self, within: Any | None = None) -> Any:
        """Open the first leg listed in a table, on the page or inside a dialog."""
        button = self.waits.wait_for_element(
            self.surface, DOM.TRACKING.leg_table_button, condition="enabled", within=within
        )
        self.surface.click(button)
        return self.modals.wait_for_modal(DOM.TRACKING.update_leg_modal_title)

    def sync_open_dialog(self, description: str = "trip") -> Any:
        """Sync the dialog currently on top. Returns the dialog."""
        modal = self.modals.wait_for_modal()
        self.modals.sync_modal(modal, description)
        return modal

    def assign_leg_resources(self, leg: LegData) -> None:
        logger.info("Assigning driver and vehicle...")
        if leg.driver:
            self.dropdowns.open_and_select(DOM.TRACKING.driver_select, leg.driver, search=leg.driver[:5])
        if leg.vehicle:
            self.dropdowns.open_and_select(DOM.TRACKING.vehicle_select, leg.vehicle, search=leg.vehicle[:3])
        if leg.remarks:
            self.fill(DOM.TRACKING.leg_remarks, leg.remarks)

    def update_leg_timeline(self, leg: LegData) -> None:
        """
        Touch each timeline field set on leg.

        True clicks the field's button, which stamps the current time. A string
        such as "09:15" or "0915" is typed into the time input after the click.
        """
        for field, value in leg.timeline().items():
            self.click(by_id(DOM.TRACKING.time_button_template.format(field=field)))
            if isinstance(value, str):
                self.fill(DOM.TRACKING.time_input, value.replace(":", ""))
            logger.info(f"Timeline {field} set")

    def submit_leg(self) -> None:
        logger.info("Submitting leg...")
        self.modals.submit_modal(DOM.TRACKING.submit_leg_button, wait_for_validation=True)

    def close_leg_dialog(self) -> None:
        self.modals.close_modal(DOM.TRACKING.update_leg_modal_title)

    def cancel_leg_edit(self) -> None:
        """Close the leg dialog without saving, discarding any changes."""
        logger.info("Cancelling leg edit without saving...")
        self.close_leg_dialog()
        try:
            discard = self.waits.wait_for_element(
                self.surface, DOM.TRACKING.discard_confirm_button, VALIDATION_TIMEOUT_SECONDS
            )
        except TimeoutException:
            logger.debug("No discard confirmation shown")
            return
        self.surface.click(discard)
        logger.info("Edit cancelled, changes discarded")

    def leg_row_text(self, leg_number: int) -> str:
        return self.surface.text_of(self._leg_row(leg_number))

    def verify_leg_status(self, leg_number: int, expected_status: str, timeout: float = STATUS_TIMEOUT_SECONDS) -> None:
        """
        Wait until the leg's row shows expected_status.

        Raises:
            TimeoutException: The row never showed the status.
        """
        locator = by_id(DOM.TRACKING.leg_row_template.format(index=leg_number - 1))
        self.waits.wait_until(
            lambda: any(expected_status in self.surface.text_of(e) for e in self.surface.find_all(locator)),
            timeout,
            f"leg #{leg_number} status {expected_status}",
        )
        if expected_status in {s.value for s in LegStatus}:
            self.state.status = LegStatus(expected_status)
        logger.info(f"Leg #{leg_number} status confirmed: {expected_status}")

    def verify_job_status(self, job_number: int, expected_status: str, timeout: float = STATUS_TIMEOUT_SECONDS) -> None:
        locator = by_id(DOM.TRACKING.job_section_template.format(index=job_number - 1))
        self.waits.wait_until(
            lambda: any(expected_status in self.surface.text_of(e) for e in self.surface.find_all(locator)),
            timeout,
            f"job #{job_number} status {expected_status}",
        )
        logger.info(f"Job #{job_number} status confirmed: {expected_status}")

    def attempt_submit(self, error_pattern: str) -> bool:
        """Click Submit and report whether a validation error matching error_pattern appears."""
        self.click(DOM.TRACKING.submit_leg_button)
        compiled = re.compile(error_pattern, re.IGNORECASE)

        def matching_error() -> bool:
            return any(
                self.surface.is_displayed(e) and compiled.search(self.surface.text_of(e))
                for e in self.surface.find_all(DOM.TRACKING.validation_error)
            )

        try:
            return self.waits.wait_until(matching_error, VALIDATION_TIMEOUT_SECONDS, "validation error")
        except TimeoutException:
            return False

    def attempt_submit_without_driver(self) -> bool:
        return self.attempt_submit(DRIVER_MISSING_PATTERN)

    def attempt_submit_without_vehicle(self) -> bool:
        return self.attempt_submit(VEHICLE_MISSING_PATTERN)

    def attempt_invalid_time_range(self, start_time: str, end_time: str) -> bool:
        self.update_leg_timeline(LegData(start=start_time, end=end_time))
        return self.attempt_submit(TIME_ORDER_PATTERN)
