"""
Tests for the wait strategy helper module.

These tests verify the WaitMode enum, WaitStrategy class, and the
condition-based wait behavior against the in-memory surface.
"""

from unittest.mock import MagicMock, patch

import pytest
from selenium.common.exceptions import StaleElementReferenceException, TimeoutException

from harness.config import WaitMode
from harness.providers.wait_helper import (
    HYBRID_BUFFER_SECONDS,
    Deadline,
    WaitStrategy,
    get_wait_strategy,
)
from tests.fixtures.fake_surface import FakeElement, FakeSurface

LOCATOR = ("css selector", ".test-element")


class TestWaitModeEnum:
    """Tests for the WaitMode enum."""

    def test_wait_mode_has_event_driven_value(self) -> None:
        """Test that EVENT_DRIVEN mode exists with correct value."""
        assert WaitMode.EVENT_DRIVEN.value == "event_driven"

    def test_wait_mode_has_hybrid_value(self) -> None:
        """Test that HYBRID mode exists with correct value."""
        assert WaitMode.HYBRID.value == "hybrid"

    def test_wait_mode_from_string(self) -> None:
        """Test that WaitMode can be created from string values."""
        assert WaitMode("event_driven") == WaitMode.EVENT_DRIVEN
        assert WaitMode("hybrid") == WaitMode.HYBRID

    def test_fixed_mode_is_not_supported(self) -> None:
        """Test that sleeping for a guessed duration is not a wait mode."""
        with pytest.raises(ValueError):
            WaitMode("fixed")


class TestWaitStrategyInit:
    """Tests for WaitStrategy initialization."""

    def test_init_with_explicit_hybrid_mode(self) -> None:
        """Test initialization with explicit HYBRID mode."""
        strategy = WaitStrategy(mode=WaitMode.HYBRID)
        assert strategy.mode == WaitMode.HYBRID

    def test_init_uses_settings_when_no_mode_provided(self) -> None:
        """Test that init uses settings when no mode, timeout or interval is provided."""
        with patch("harness.providers.wait_helper.settings") as mock_settings:
            mock_settings.wait_mode = WaitMode.HYBRID
            mock_settings.default_timeout_seconds = 7.0
            mock_settings.poll_interval_seconds = 0.1
            strategy = WaitStrategy()

        assert strategy.mode == WaitMode.HYBRID
        assert strategy.timeout == 7.0
        assert strategy.poll_interval == 0.1

    def test_zero_timeout_is_respected(self) -> None:
        """Test that an explicit zero timeout is not replaced by the default."""
        assert WaitStrategy(timeout=0).timeout == 0


class TestWaitUntil:
    """Tests for WaitStrategy.wait_until."""

    def test_returns_first_truthy_value(self, waits: WaitStrategy) -> None:
        """Test that the condition's value is returned once it is truthy."""
        condition = MagicMock(side_effect=[None, False, "ready"])

        assert waits.wait_until(condition) == "ready"
        assert condition.call_count == 3

    def test_raises_timeout_at_ceiling(self, waits: WaitStrategy, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a condition that never holds raises TimeoutException."""
        with pytest.raises(TimeoutException):
            waits.wait_until(lambda: False, timeout=0.05, description="the moon")

        assert "waiting for the moon" in caplog.text

    def test_stale_reads_count_as_not_yet(self, waits: WaitStrategy) -> None:
        """Test that StaleElementReferenceException while polling is ignored."""
        condition = MagicMock(side_effect=[StaleElementReferenceException("gone"), True])

        assert waits.wait_until(condition) is True

    def test_event_driven_mode_does_not_sleep_after_condition(self, waits: WaitStrategy) -> None:
        """Test that EVENT_DRIVEN mode returns without a settle buffer."""
        with patch("harness.providers.wait_helper.time_module.sleep") as mock_sleep:
            waits.wait_until(lambda: True)
            mock_sleep.assert_not_called()

    def test_hybrid_mode_adds_buffer_sleep(self) -> None:
        """Test that HYBRID mode adds the buffer sleep after the condition is met."""
        strategy = WaitStrategy(mode=WaitMode.HYBRID, timeout=0.3, poll_interval=0.01)

        with patch("harness.providers.wait_helper.time_module.sleep") as mock_sleep:
            strategy.wait_until(lambda: True)
            mock_sleep.assert_called_once_with(HYBRID_BUFFER_SECONDS)


class TestWaitForElement:
    """Tests for WaitStrategy.wait_for_element."""

    def test_visible_skips_hidden_elements(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that 'visible' returns the first displayed element."""
        visible = FakeElement(text="shown")
        surface.add(LOCATOR, FakeElement(text="hidden", displayed=False), visible)

        assert waits.wait_for_element(surface, LOCATOR) is visible

    def test_presence_accepts_hidden_elements(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that 'presence' only requires the element to exist."""
        hidden = surface.add(LOCATOR, FakeElement(displayed=False))

        assert waits.wait_for_element(surface, LOCATOR, condition="presence") is hidden

    def test_enabled_waits_for_enabled_element(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that 'enabled' times out while the element is disabled."""
        button = surface.add(LOCATOR, FakeElement(enabled=False))

        with pytest.raises(TimeoutException):
            waits.wait_for_element(surface, LOCATOR, timeout=0.05, condition="enabled")

        button.enabled = True
        assert waits.wait_for_element(surface, LOCATOR, condition="enabled") is button

    def test_scoped_lookup(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that within restricts the lookup to an element's children."""
        inner = FakeElement(text="inner")
        surface.add(LOCATOR, FakeElement(text="outer"))
        parent = FakeElement().add_child(LOCATOR, inner)

        assert waits.wait_for_element(surface, LOCATOR, within=parent) is inner

    def test_unknown_condition_raises_value_error(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that an unknown condition is rejected before polling."""
        with pytest.raises(ValueError):
            waits.wait_for_element(surface, LOCATOR, condition="clickable")


class TestPageWaits:
    """Tests for hidden, URL and page-ready waits."""

    def test_wait_for_hidden(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that wait_for_hidden succeeds when nothing matching is displayed."""
        surface.add(LOCATOR, FakeElement(displayed=False))

        assert waits.wait_for_hidden(surface, LOCATOR) is True

    def test_wait_for_hidden_times_out_while_displayed(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that a displayed element keeps wait_for_hidden waiting."""
        surface.add(LOCATOR, FakeElement())

        with pytest.raises(TimeoutException):
            waits.wait_for_hidden(surface, LOCATOR, timeout=0.05)

    def test_wait_for_url_returns_matching_url(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that wait_for_url returns the URL once it matches."""
        surface.navigate("/bookings/12345")

        assert waits.wait_for_url(surface, r"/bookings/\d+") == "http://app.test/bookings/12345"

    def test_wait_for_url_times_out(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that a URL that never matches raises TimeoutException."""
        with pytest.raises(TimeoutException):
            waits.wait_for_url(surface, r"/bookings/\d+", timeout=0.05)

    def test_wait_for_page_ready(self, surface: FakeSurface, waits: WaitStrategy) -> None:
        """Test that page readiness is polled from the surface."""
        surface.ready = False
        with pytest.raises(TimeoutException):
            waits.wait_for_page_ready(surface, timeout=0.05)

        surface.ready = True
        assert waits.wait_for_page_ready(surface) is True


class TestGetWaitStrategy:
    """Tests for the get_wait_strategy factory function."""

    def test_factory_returns_wait_strategy_instance(self) -> None:
        """Test that factory returns a WaitStrategy instance."""
        strategy = get_wait_strategy()
        assert isinstance(strategy, WaitStrategy)

    def test_factory_with_explicit_mode(self) -> None:
        """Test factory with explicit mode override."""
        strategy = get_wait_strategy(WaitMode.HYBRID)
        assert strategy.mode == WaitMode.HYBRID


class TestDeadline:
    """Tests for capping waits at a scenario deadline."""

    def test_ceiling_is_cut_to_remaining_time(self) -> None:
        """Test that a wait never gets more time than the deadline leaves."""
        strategy = WaitStrategy(timeout=30.0, deadline=Deadline(expires_at=100.0, clock=lambda: 99.5))
        assert strategy.ceiling() == 0.5
        assert strategy.ceiling(0.2) == 0.2

    def test_expired_deadline_gives_zero_ceiling(self) -> None:
        """Test that once the deadline has passed every wait ceiling is zero."""
        deadline = Deadline(expires_at=1.0, clock=lambda: 2.0)
        assert deadline.expired()
        assert WaitStrategy(deadline=deadline).ceiling(10.0) == 0.0

    def test_wait_until_stops_at_deadline(self) -> None:
        """Test that a long wait gives up when the deadline passes."""
        strategy = WaitStrategy(mode=WaitMode.EVENT_DRIVEN, poll_interval=0.01, deadline=Deadline.after(0.1))

        with pytest.raises(TimeoutException):
            strategy.wait_until(lambda: False, timeout=30.0, description="never")

    def test_no_deadline_keeps_requested_timeout(self) -> None:
        """Test that without a deadline the requested ceiling is used unchanged."""
        assert WaitStrategy(timeout=7.0).ceiling() == 7.0
