import logging

from harness.models.schemas import IncentiveData, ShiftData
from harness.pages.base_page import BasePage
from harness.providers.dom_schema import DOM, XPATH

logger = logging.getLogger(__name__)

UPDATE_DIALOG_TIMEOUT_SECONDS = 15.0


class ShiftPage(BasePage):
    """Transport > Incentives > Shifts: create, add incentives, close, approve or cancel."""

    def navigate_to_shifts(self) -> None:
        self.click(DOM.SHIFT.transport_menu)
        self.click(DOM.SHIFT.incentives_menu)
        self.click(DOM.SHIFT.shifts_menu)
        self.wait_for_page_load()
        logger.info("Navigated to Shifts")

    def search_shifts(self) -> None:
        self.click(DOM.SHIFT.search_button)
        self.wait_for_page_load()

    def open_shift_creation_modal(self) -> None:
        self.click(DOM.LEGACY.create_shift_button)
        self.modals.wait_for_modal()

    def select_driver(self, driver_name: str) -> None:
        self.dropdowns.open_and_select(DOM.SHIFT.driver_select, driver_name)

    def select_vehicle(self, vehicle_code: str) -> None:
        self.dropdowns.open_and_select(DOM.SHIFT.vehicle_select, vehicle_code)

    def select_shift_date(self, day: str) -> None:
        """Pick a day of the current month in the start date picker and confirm with OK."""
        self.click(DOM.SHIFT.start_date)
        self.click((XPATH, DOM.SHIFT.date_cell_template.format(day=day)))
        self.click(DOM.SHIFT.date_ok_button)

    def fill_remarks(self, remarks: str) -> None:
        self.fill(DOM.SHIFT.remarks, remarks)

    def submit_shift_form(self) -> None:
        self.modals.submit_modal(DOM.SHIFT.submit_button, wait_for_validation=True)

    def create_shift(self, shift: ShiftData) -> None:
        """Create a shift and wait for the Update Shift dialog the app opens on success."""
        logger.info(f"Creating shift for {shift.driver} / {shift.vehicle}")
        self.open_shift_creation_modal()
        self.select_driver(shift.driver)
        self.select_vehicle(shift.vehicle)
        self.select_shift_date(shift.shift_date)
        if shift.remarks:
            self.fill_remarks(shift.remarks)
        self.submit_shift_form()
        self.modals.wait_for_modal(DOM.SHIFT.update_dialog_title, UPDATE_DIALOG_TIMEOUT_SECONDS)
        logger.info("Shift created")

    def add_incentive(self, incentive: IncentiveData) -> None:
        title = DOM.SHIFT.incentive_dialog_title
        self.click(DOM.SHIFT.add_incentive_button)
        self.modals.wait_for_modal(title)
        self.dropdowns.open_and_select(DOM.SHIFT.incentive_type, incentive.incentive_type)
        self.fill(DOM.SHIFT.amount, f"{incentive.amount:g}")
        self.modals.submit_modal(DOM.SHIFT.incentive_submit, wait_for_validation=True)
        self.waits.wait_until(lambda: not self.modals.is_modal_visible(title), description=f"{title} dialog to close")
        logger.info(f"Incentive {incentive.incentive_type} ({incentive.amount:g}) added")

    def close_shift(self) -> None:
        self.click(DOM.SHIFT.close_shift_button)
        self.wait_for_page_load()
        logger.info("Shift closed")

    def approve_shift(self) -> None:
        self.click(DOM.SHIFT.approve_icon)
        self.modals.confirm()
        logger.info("Shift approved")

    def cancel_shift(self) -> None:
        self.click(DOM.SHIFT.cancel_icon)
        self.modals.confirm()
        logger.info("Shift cancelled")
