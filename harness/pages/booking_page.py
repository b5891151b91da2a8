"""
Booking creation page object.

The form has three steps: booking details, job details (with trips) and a
confirmation step. create_booking fills the first two and stays on the job
details step so callers can add remarks and trips before submit_booking.
"""

import logging
import re

from harness.models.schemas import BookingData
from harness.pages.base_page import BasePage
from harness.providers.dom_schema import DOM, by_id
from harness.providers.retry import retry_call

logger = logging.getLogger(__name__)

SUBMIT_TIMEOUT_SECONDS = 30.0


class BookingPage(BasePage):
    def navigate_to_new_booking(self) -> None:
        logger.info('Clicking "New Booking"...')
        self.click(DOM.BOOKING_FORM.new_booking_link)
        self.wait_for_page_load()

    def fill_booking_details(self, data: BookingData) -> None:
        form = DOM.BOOKING_FORM
        logger.info("Step 1: Booking Details")
        self.dropdowns.open_and_select(form.billing_customer, data.billing_customer)
        self.dropdowns.open_and_select(form.booking_type, data.booking_type)
        self.dropdowns.open_and_select(form.department, data.department)
        self.fill(form.shipper_ref, data.shipper_ref)
        self.fill(form.customer_ref, data.customer_ref)
        if data.remarks:
            self.fill(form.remarks, data.remarks)
        self.dropdowns.open_and_select(form.load_type, data.load_type)
        if data.customer_so:
            self.fill(form.customer_so, data.customer_so)
        if data.references:
            self.fill(form.references, data.references)
        self.dropdowns.open_and_select(form.quotation, data.quotation)

    def fill_job_details(self, data: BookingData) -> None:
        form = DOM.BOOKING_FORM
        logger.info("Step 2: Job Details")
        self.dropdowns.open_and_select(form.job_type, data.job_type)
        self.dropdowns.open_and_select(form.measurement_type, data.measurement_type)
        self.fill(form.quantity, data.quantity)
        self.dropdowns.open_and_select(form.uom, data.uom)
        self.dropdowns.open_and_select(form.from_company, data.from_company)
        self.dropdowns.open_and_select(form.to_company, data.to_company)

    def next_step(self) -> None:
        self.click(DOM.BOOKING_FORM.next_button)
        self.wait_for_page_load()

    def create_booking(self, data: BookingData) -> None:
        """Fill booking and job details, leaving the form on the job details step."""
        logger.info(f"Starting booking creation (shipper ref {data.shipper_ref})...")
        self.navigate_to_new_booking()
        self.fill_booking_details(data)
        self.next_step()
        self.fill_job_details(data)
        logger.info("Booking form filled; ready for job/trip additions")

    def fill_job_remarks(self, job_index: int, remarks: str) -> None:
        self.fill(by_id(DOM.BOOKING_FORM.job_remarks_template.format(index=job_index)), remarks)

    def fill_trip_remarks(self, trip_number: int, remarks: str) -> None:
        self.fill(by_id(DOM.BOOKING_FORM.trip_remarks_template.format(index=trip_number)), remarks)

    def trip_count(self) -> int:
        return len(self.surface.find_all(DOM.BOOKING_FORM.trip_remarks_fields))

    def add_trip(self) -> int:
        """Add a trip to the first job. Returns the new trip's number."""
        before = self.trip_count()
        self.click(DOM.BOOKING_FORM.add_trip_button)
        self.waits.wait_until(lambda: self.trip_count() > before, description="new trip to render")
        logger.info(f"Trip #{before + 1} added")
        return before + 1

    def submit_booking(self) -> str:
        """
        Move to the confirmation step, allow duplicates and submit.

        Returns:
            The new booking's id, read from the URL the app redirects to.
        """
        self.next_step()
        checkbox = self.waits.wait_for_element(
            self.surface, DOM.BOOKING_FORM.override_duplicate, condition="presence"
        )
        if self.surface.attribute_of(checkbox, "checked") is None:
            self.surface.click(checkbox)
        logger.info("Submitting booking...")
        retry_call(
            lambda: self.click(DOM.BOOKING_FORM.submit_button),
            description="click booking Submit",
            deadline=self.waits.deadline,
        )
        booking_id = self.get_booking_id_from_url(SUBMIT_TIMEOUT_SECONDS)
        logger.info(f"Booking submitted with ID: {booking_id}")
        return booking_id

    def get_booking_id_from_url(self, timeout: float | None = None) -> str:
        """Wait for a /bookings/<id> URL (not /bookings/new) and return the id."""
        pattern = DOM.BOOKING_FORM.booking_url_pattern
        url = self.waits.wait_for_url(self.surface, pattern, timeout)
        return re.search(pattern, url).group(1)

    def verify_booking_exists(self, booking_id: str) -> None:
        """Open the booking by id and wait for its header."""
        self.goto(DOM.TRACKING.booking_path_template.format(booking_id=booking_id))
        self.waits.wait_for_url(self.surface, rf"/bookings/{re.escape(booking_id)}\b")
        self.wait_for_element(DOM.BOOKING_FORM.booking_header)
        logger.info(f"Booking {booking_id} exists")
