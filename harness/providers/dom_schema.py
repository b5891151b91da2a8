"""
Centralized DOM schema for the logistics booking web application.

All locators used by the helpers and page objects are defined here as named
constants, grouped by screen. Locators are (strategy, value) tuples using
Selenium's By strategy names.

Identifier attributes (id, aria-label, role + accessible name) are the only
supported lookup strategy. Structural CSS paths that still exist because the
application offers no identifier for the element live in LegacyStructuralSelectors,
and nowhere else, so the remaining debt is visible in one place.

When the application changes its markup, update locators ONLY in this file.
"""

from dataclasses import dataclass

from harness.providers.base import Locator

CSS = "css selector"
XPATH = "xpath"
ID = "id"


def by_id(element_id: str) -> Locator:
    """Locator for an element id; works for ids containing dots such as details.shipperRef."""
    return (CSS, f'[id="{element_id}"]')


def button_named(name: str, exact: bool = True) -> Locator:
    """Locator for a button by its accessible text."""
    if exact:
        return (XPATH, f"//button[normalize-space(.)='{name}' or @aria-label='{name}']")
    return (XPATH, f"//button[contains(normalize-space(.), '{name}') or contains(@aria-label, '{name}')]")


def link_named(name: str, exact: bool = True) -> Locator:
    if exact:
        return (XPATH, f"//a[normalize-space(.)='{name}']")
    return (XPATH, f"//a[contains(normalize-space(.), '{name}')]")


def text_exact(text: str) -> Locator:
    return (XPATH, f"//*[normalize-space(text())='{text}']")


def text_containing(text: str) -> Locator:
    return (XPATH, f"//*[contains(normalize-space(text()), '{text}')]")


def textbox_labelled(label: str) -> Locator:
    """Input or textarea whose aria-label, placeholder or associated label equals label."""
    return (
        XPATH,
        f"//*[self::input or self::textarea][@aria-label='{label}' or @placeholder='{label}' "
        f"or @id=//label[normalize-space(.)='{label}']/@for]",
    )


@dataclass(frozen=True)
class DropdownSelectors:
    """Ant Design select dropdown portals."""

    # Every rendered dropdown portal, including stale ones left by earlier selects
    container: Locator = (CSS, ".ant-select-dropdown")
    # Options inside one portal
    option: Locator = (CSS, ".ant-select-item-option")
    # Classes marking a portal as closed or closing
    inactive_classes: tuple[str, ...] = (
        "ant-select-dropdown-hidden",
        "ant-slide-up-leave",
        "ant-slide-up-leave-active",
    )
    # Attributes on a select's input naming the id of the listbox inside its portal
    owner_attributes: tuple[str, ...] = ("aria-controls", "aria-owns")
    # Search input of the focused select, for type-ahead filtering
    search_input: Locator = (CSS, ".ant-select-focused input.ant-select-selection-search-input")
    # Shown while options are still being fetched
    loading: Locator = (CSS, ".ant-select-dropdown .ant-select-item-empty, .ant-select-dropdown .ant-spin")


@dataclass(frozen=True)
class ModalSelectors:
    """Ant Design modal dialogs."""

    wrap: Locator = (CSS, ".ant-modal-wrap")
    dialog: Locator = (CSS, "[role='dialog']")
    title: Locator = (CSS, ".ant-modal-title")
    close_button: Locator = (CSS, "button.ant-modal-close, button[aria-label='Close']")
    sync_button: Locator = (XPATH, ".//button[.//span[contains(@class, 'anticon-sync')]]")
    confirm_yes: Locator = (XPATH, "//button[normalize-space(.)='Yes']")


@dataclass(frozen=True)
class LoginSelectors:
    """Auth0 universal login plus the base-company chooser."""

    sign_in_path: str = "/auth/sign-in"
    proceed_button: Locator = (XPATH, "//button[normalize-space(.)='Proceed']")
    email_input: Locator = (ID, "username")
    password_input: Locator = (ID, "password")
    login_button: Locator = (XPATH, "//button[@type='submit' and normalize-space(.)='Log in']")
    landing_url_pattern: str = r"/filter"


@dataclass(frozen=True)
class BookingFormSelectors:
    """Three-step booking creation form."""

    new_booking_link: Locator = (XPATH, "//a[contains(normalize-space(.), 'New Booking')]")
    billing_customer: Locator = by_id("details.billingCustomerUuid")
    booking_type: Locator = by_id("details.type")
    department: Locator = by_id("details.departmentUuid")
    shipper_ref: Locator = by_id("details.shipperRef")
    customer_ref: Locator = by_id("details.customerRef")
    remarks: Locator = by_id("details.remarks")
    load_type: Locator = by_id("details.loadType")
    customer_so: Locator = by_id("details.customerSo")
    references: Locator = by_id("details.references")
    quotation: Locator = by_id("details.quotationUuid")

    job_type: Locator = by_id("details-jobType")
    measurement_type: Locator = by_id("details-measurementType")
    quantity: Locator = by_id("details-quantity")
    uom: Locator = by_id("details-uom")
    from_company: Locator = by_id("trip-from-company")
    to_company: Locator = by_id("trip-to-company")
    job_remarks_template: str = "job-remarks-{index}"
    trip_remarks_template: str = "trip-remarks-{index}"
    trip_remarks_fields: Locator = (CSS, "[id^='trip-remarks-']")
    add_trip_button: Locator = (XPATH, "//*[@aria-label='Add New Job']//button[normalize-space(.)='plus' or @aria-label='plus']")

    next_button: Locator = (XPATH, "(//button[contains(normalize-space(.), 'Next')])[last()]")
    override_duplicate: Locator = (CSS, "input[type='checkbox'].ant-checkbox-input")
    submit_button: Locator = (XPATH, "//button[normalize-space(.)='Submit']")
    booking_url_pattern: str = r"/bookings/(?!new\b)([A-Za-z0-9-]+)"
    booking_header: Locator = (CSS, "[id='booking-header'], .ant-page-header")


@dataclass(frozen=True)
class TrackingSelectors:
    """Booking tracking page: jobs, trips and legs."""

    booking_path_template: str = "/bookings/{booking_id}"
    accept_button: Locator = (XPATH, "//button[normalize-space(.)='Accept' or contains(normalize-space(.), 'Accept Booking')]")
    sync_button: Locator = (XPATH, "//button[@aria-label='sync' or normalize-space(.)='sync']")
    leg_row_template: str = "job-trip-legs-row-{index}"
    leg_row_button: Locator = (CSS, "button")
    job_section_template: str = "job-{index}"
    update_leg_modal_title: str = "Update Leg"
    driver_select: Locator = (CSS, "input[role='combobox'][id$='driverUuid']")
    vehicle_select: Locator = (CSS, "input[role='combobox'][id$='vehicleUuid']")
    leg_remarks: Locator = (XPATH, "//textarea[@placeholder='Enter remarks...']")
    time_button_template: str = "submit-time-button-{field}"
    time_input: Locator = (XPATH, "//input[@placeholder='0000']")
    submit_leg_button: Locator = (XPATH, "//button[contains(normalize-space(.), 'Submit')]")
    validation_error: Locator = (CSS, ".ant-form-item-explain-error")
    leg_table_button: Locator = (CSS, "table button")
    job_sections: Locator = (XPATH, "//*[starts-with(@id, 'job-') and not(starts-with(@id, 'job-trip')) and not(starts-with(@id, 'job-remarks'))]")
    job_remarks_input: Locator = (XPATH, "(//textarea[@placeholder='Enter job remarks...'])[last()]")
    trip_remarks_input: Locator = (XPATH, "(//textarea[starts-with(@placeholder, 'Enter trip #')])[last()]")
    discard_confirm_button: Locator = (XPATH, "//div[contains(@class, 'ant-modal-confirm') or contains(@class, 'ant-popover')]//button[normalize-space(.)='Close']")


@dataclass(frozen=True)
class ShiftSelectors:
    """Transport > Incentives > Shifts."""

    transport_menu: Locator = (XPATH, "//button[contains(translate(normalize-space(.), 'TRANSPORT', 'transport'), 'transport')]")
    incentives_menu: Locator = (XPATH, "//*[@role='menuitem' and normalize-space(.)='Incentives']")
    shifts_menu: Locator = (XPATH, "//*[@role='menuitem' and normalize-space(.)='Shifts']")
    search_button: Locator = (XPATH, "//button[normalize-space(.)='Search']")
    driver_select: Locator = (ID, "driverUuid")
    vehicle_select: Locator = (ID, "vehicleUuid")
    start_date: Locator = (ID, "start")
    date_cell_template: str = "//div[contains(@class, 'ant-picker-dropdown') and not(contains(@class, 'ant-picker-dropdown-hidden'))]//td[contains(@class, 'ant-picker-cell-in-view')]//div[normalize-space(.)='{day}']"
    date_ok_button: Locator = (XPATH, "(//div[contains(@class, 'ant-picker-dropdown') and not(contains(@class, 'ant-picker-dropdown-hidden'))]//button[normalize-space(.)='OK'])[last()]")
    remarks: Locator = (ID, "remarks")
    submit_button: Locator = (XPATH, "//div[contains(@class, 'ant-modal-footer')]//button[normalize-space(.)='OK']")
    update_dialog_title: str = "Update Shift"
    add_incentive_button: Locator = (XPATH, "//button[.//*[contains(@class, 'anticon-plus-circle')]]")
    incentive_dialog_title: str = "Create Incentive"
    incentive_type: Locator = (ID, "incentive-type-selector")
    amount: Locator = (ID, "amount")
    incentive_submit: Locator = (XPATH, "//button[normalize-space(.)='Submit']")
    close_shift_button: Locator = (XPATH, "//button[normalize-space(.)='Close Shift']")
    approve_icon: Locator = (CSS, ".anticon.anticon-check-circle")
    cancel_icon: Locator = (CSS, ".anticon.anticon-close-circle")


@dataclass(frozen=True)
class ManageSelectors:
    """User menu > Manage section."""

    user_menu: Locator = (CSS, "[aria-label='user']")
    manage_link: Locator = (XPATH, "//a[normalize-space(.)='Manage']")
    content: Locator = (CSS, ".ant-layout-content, .ant-table, .ant-card, .ant-list, .ant-form")
    table_row: Locator = (CSS, ".ant-table tbody tr")
    list_item: Locator = (CSS, ".ant-list-item")
    card: Locator = (CSS, ".ant-card")


@dataclass(frozen=True)
class LegacyStructuralSelectors:
    """
    Structural fallbacks for elements the application exposes no identifier for.

    Each entry is temporary: replace it with an identifier locator as soon as
    the application ships one, then delete it here.
    """

    # TODO: switch to ("id", "create-shift-button") once the shift toolbar button carries that id.
    create_shift_button: Locator = (XPATH, "//button[@aria-label='plus' or normalize-space(.)='plus']")
    user_menu_icon: Locator = (CSS, ".anticon.anticon-user")
    # Second "plus" button on the tracking page; the first belongs to the page toolbar.
    add_job_button: Locator = (XPATH, "(//button[@aria-label='plus' or normalize-space(.)='plus'])[2]")


@dataclass(frozen=True)
class AppDOMSchema:
    """Top-level container grouping all locator categories."""

    DROPDOWN: DropdownSelectors = DropdownSelectors()
    MODAL: ModalSelectors = ModalSelectors()
    LOGIN: LoginSelectors = LoginSelectors()
    BOOKING_FORM: BookingFormSelectors = BookingFormSelectors()
    TRACKING: TrackingSelectors = TrackingSelectors()
    SHIFT: ShiftSelectors = ShiftSelectors()
    MANAGE: ManageSelectors = ManageSelectors()
    LEGACY: LegacyStructuralSelectors = LegacyStructuralSelectors()


# Single import point: `from harness.providers.dom_schema import DOM`
DOM = AppDOMSchema()
