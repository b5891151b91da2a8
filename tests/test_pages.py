"""
Page-object tests against the in-memory surface.

Each test registers only the elements the operation touches, so a page
object reaching for anything else fails with a timeout.
"""

import pytest
from selenium.common.exceptions import TimeoutException

from harness.config import settings
from harness.models.schemas import EntityData, LegData, LegStatus
from harness.pages.base_page import BasePage
from harness.pages.booking_page import BookingPage
from harness.pages.login_page import LoginPage
from harness.pages.manage_entities_page import ManageEntitiesPage
from harness.pages.shift_page import ShiftPage
from harness.pages.tracking_page import TrackingPage
from harness.providers.dom_schema import DOM, by_id, link_named, text_containing, text_exact
from harness.providers.wait_helper import WaitStrategy
from tests.fixtures.fake_surface import FakeElement, FakeSurface


def navigates_to(path: str):
    def on_click(surface: FakeSurface, _element: FakeElement) -> None:
        surface.navigate(path)

    return on_click


def hide(_surface: FakeSurface, element: FakeElement) -> None:
    element.displayed = False


class TestBasePage:
    def test_goto_waits_for_page_ready(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        BasePage(surface, waits).goto("/bookings")

        assert surface.navigations == ["http://app.test/bookings"]

    def test_click_waits_for_enabled_element(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        locator = DOM.BOOKING_FORM.next_button
        surface.add(locator, FakeElement(enabled=False))

        with pytest.raises(TimeoutException):
            BasePage(surface, waits).click(locator, timeout=0.05)
        assert surface.clicked == []

    def test_take_screenshot(
        self, surface: FakeSurface, waits: WaitStrategy, monkeypatch: pytest.MonkeyPatch, tmp_path
    ) -> None:
        monkeypatch.setattr(settings, "screenshot_dir", str(tmp_path))

        path = BasePage(surface, waits).take_screenshot("after-submit")

        assert path == tmp_path / "after-submit.png"
        assert surface.screenshots == [str(path)]


class TestLoginPage:
    def test_login_fills_credentials(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        proceed = surface.add(DOM.LOGIN.proceed_button, FakeElement(text="Proceed"))
        surface.add(DOM.LOGIN.email_input, FakeElement())
        surface.add(DOM.LOGIN.password_input, FakeElement())
        login_button = surface.add(DOM.LOGIN.login_button, FakeElement(text="Log in"))

        LoginPage(surface, waits).login("bot@example.com", "s3cret")

        assert surface.navigations == ["http://app.test/auth/sign-in"]
        assert proceed.clicks == 1
        assert surface.filled_value(DOM.LOGIN.email_input) == "bot@example.com"
        assert surface.filled_value(DOM.LOGIN.password_input) == "s3cret"
        assert login_button.clicks == 1

    def test_select_company_expands_parent_first(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        parent = surface.add(text_containing("Another Base Company"), FakeElement())
        company = surface.add(
            text_exact("Another Base Company Testing"), FakeElement(on_click=navigates_to("/filter"))
        )

        LoginPage(surface, waits).select_company("Another Base Company Testing")

        assert surface.clicked == [parent, company]

    def test_login_with_settings_requires_credentials(
        self, surface: FakeSurface, waits: WaitStrategy, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "bot_email", "")
        monkeypatch.setattr(settings, "bot_password", "")

        with pytest.raises(ValueError, match="BOT_EMAIL"):
            LoginPage(surface, waits).login_with_settings()
        assert surface.navigations == []


class TestBookingPage:
    def test_submit_booking_returns_id_from_url(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        surface.url = "http://app.test/bookings/new"
        surface.add(DOM.BOOKING_FORM.next_button, FakeElement(text="Next"))
        checkbox = surface.add(DOM.BOOKING_FORM.override_duplicate, FakeElement(displayed=False))
        surface.add(DOM.BOOKING_FORM.submit_button, FakeElement(on_click=navigates_to("/bookings/98765")))

        booking_id = BookingPage(surface, waits).submit_booking()

        assert booking_id == "98765"
        assert checkbox.clicks == 1

    def test_checked_override_is_left_alone(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        surface.add(DOM.BOOKING_FORM.next_button, FakeElement(text="Next"))
        checkbox = surface.add(DOM.BOOKING_FORM.override_duplicate, FakeElement(attributes={"checked": "true"}))
        surface.add(DOM.BOOKING_FORM.submit_button, FakeElement(on_click=navigates_to("/bookings/B-200")))

        assert BookingPage(surface, waits).submit_booking() == "B-200"
        assert checkbox.clicks == 0

    def test_new_booking_url_is_not_an_id(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        surface.url = "http://app.test/bookings/new"

        with pytest.raises(TimeoutException):
            BookingPage(surface, waits).get_booking_id_from_url(timeout=0.05)

    def test_add_trip_waits_for_new_remarks_field(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        surface.add(DOM.BOOKING_FORM.trip_remarks_fields, FakeElement())

        def render_trip(s: FakeSurface, _element: FakeElement) -> None:
            s.add(DOM.BOOKING_FORM.trip_remarks_fields, FakeElement())

        surface.add(DOM.BOOKING_FORM.add_trip_button, FakeElement(on_click=render_trip))

        assert BookingPage(surface, waits).add_trip() == 2

    def test_fill_trip_remarks_by_number(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        field = surface.add(by_id("trip-remarks-1"), FakeElement())

        BookingPage(surface, waits).fill_trip_remarks(1, "Second trip")

        assert field.value == "Second trip"


class TestTrackingPage:
    @pytest.fixture
    def page(self, surface: FakeSurface, waits: WaitStrategy) -> TrackingPage:
        page = TrackingPage(surface, waits)
        page.navigate_to_booking("12345")
        return page

    def test_navigate_sets_state(self, surface: FakeSurface, page: TrackingPage) -> None:
        assert surface.url == "http://app.test/bookings/12345"
        assert page.state.booking_id == "12345"

    def test_accept_is_skipped_when_already_accepted(self, page: TrackingPage) -> None:
        assert page.accept_booking() is False

    def test_accept_clicks_and_waits_for_button_to_go(self, surface: FakeSurface, page: TrackingPage) -> None:
        accept = surface.add(DOM.TRACKING.accept_button, FakeElement(text="Accept", on_click=hide))

        assert page.accept_booking() is True
        assert accept.clicks == 1

    def test_timeline_clicks_buttons_and_types_times(self, surface: FakeSurface, page: TrackingPage) -> None:
        start = surface.add(by_id("submit-time-button-start"), FakeElement())
        end = surface.add(by_id("submit-time-button-end"), FakeElement())
        plan_start = surface.add(by_id("submit-time-button-planStart"), FakeElement())
        surface.add(DOM.TRACKING.time_input, FakeElement())

        page.update_leg_timeline(LegData(plan_start=False, start=True, end="09:30"))

        assert start.clicks == 1
        assert end.clicks == 1
        assert plan_start.clicks == 0
        assert surface.filled_value(DOM.TRACKING.time_input) == "0930"

    def test_verify_leg_status_updates_state(self, surface: FakeSurface, page: TrackingPage) -> None:
        surface.add(by_id("job-trip-legs-row-0"), FakeElement(text="Leg 1  Aeril  COMPLETED"))

        page.verify_leg_status(1, "COMPLETED")

        assert page.state.status is LegStatus.COMPLETED

    def test_verify_leg_status_times_out(self, surface: FakeSurface, page: TrackingPage) -> None:
        surface.add(by_id("job-trip-legs-row-0"), FakeElement(text="Leg 1  PENDING"))

        with pytest.raises(TimeoutException):
            page.verify_leg_status(1, "COMPLETED", timeout=0.05)

    def test_submit_without_driver_shows_validation(self, surface: FakeSurface, page: TrackingPage) -> None:
        surface.add(DOM.TRACKING.submit_leg_button, FakeElement(text="Submit"))
        surface.add(DOM.TRACKING.validation_error, FakeElement(text="Driver is required"))

        assert page.attempt_submit_without_driver() is True

    def test_invalid_time_range_without_error(
        self, surface: FakeSurface, page: TrackingPage, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("harness.pages.tracking_page.VALIDATION_TIMEOUT_SECONDS", 0.05)
        surface.add(by_id("submit-time-button-start"), FakeElement())
        surface.add(by_id("submit-time-button-end"), FakeElement())
        surface.add(DOM.TRACKING.time_input, FakeElement())
        surface.add(DOM.TRACKING.submit_leg_button, FakeElement(text="Submit"))
        surface.add(DOM.TRACKING.validation_error, FakeElement(text="Driver is required"))

        assert page.attempt_invalid_time_range("10:00", "09:00") is False

    def test_open_leg_returns_dialog(self, surface: FakeSurface, page: TrackingPage) -> None:
        dialog = FakeElement(text="Update Leg", displayed=False)
        surface.add(DOM.MODAL.wrap, dialog)

        def show_dialog(_s: FakeSurface, _e: FakeElement) -> None:
            dialog.displayed = True

        row = FakeElement(text="Leg 1").add_child(DOM.TRACKING.leg_row_button, FakeElement(on_click=show_dialog))
        surface.add(by_id("job-trip-legs-row-0"), row)

        assert page.open_leg(1) is dialog


class TestShiftPage:
    def test_approve_confirms(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        icon = surface.add(DOM.SHIFT.approve_icon, FakeElement())
        yes = surface.add(DOM.MODAL.confirm_yes, FakeElement(text="Yes", on_click=hide))

        ShiftPage(surface, waits).approve_shift()

        assert surface.clicked == [icon, yes]

    def test_select_shift_date_clicks_day_cell(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        surface.add(DOM.SHIFT.start_date, FakeElement())
        cell = surface.add(("xpath", DOM.SHIFT.date_cell_template.format(day="05")), FakeElement(text="05"))
        ok = surface.add(DOM.SHIFT.date_ok_button, FakeElement(text="OK"))

        ShiftPage(surface, waits).select_shift_date("05")

        assert cell.clicks == 1
        assert ok.clicks == 1


class TestManageEntitiesPage:
    def test_visit_all_records_visited_empty_and_failed(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        addresses = EntityData(name="Addresses", link_name="Addresses", url="/manage/addresses")
        zones = EntityData(name="Zones", link_name="Zones", url="/manage/zones")
        ghost = EntityData(name="Ghost", link_name="Ghost", url="/manage/ghost")
        surface.add(link_named("Addresses", exact=False), FakeElement(on_click=navigates_to("/manage/addresses")))
        surface.add(link_named("Zones", exact=False), FakeElement(on_click=navigates_to("/manage/zones")))
        surface.add(DOM.MANAGE.content, FakeElement())
        row = FakeElement(text="Home address")
        surface.set_dynamic(DOM.MANAGE.table_row, lambda: [row] if surface.url.endswith("/addresses") else [])

        result = ManageEntitiesPage(surface, waits).visit_all([addresses, zones, ghost])

        assert result.visited == ["Addresses", "Zones"]
        assert result.empty == ["Zones"]
        assert result.failed == ["Ghost"]
        assert not result.passed()

    def test_exact_link_used_for_substring_names(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        companies = EntityData(name="Companies", link_name="Companies", url="/manage/companies", exact_link=True)
        link = surface.add(link_named("Companies", exact=True), FakeElement(on_click=navigates_to("/manage/companies")))
        surface.add(link_named("Companies", exact=False), FakeElement(text="Portal Companies"))

        ManageEntitiesPage(surface, waits).navigate_to_entity(companies)

        assert surface.clicked == [link]
