"""
Condition-based wait helper for Surface operations.

Every wait polls an observable predicate and gives up at a timeout ceiling;
nothing here sleeps for a guessed duration. The wait mode can be configured via
the WAIT_MODE environment variable.

Two modes are supported:
- EVENT_DRIVEN: poll the condition only (fastest)
- HYBRID: poll the condition, then add a small settle buffer for UI animations

A WaitStrategy can also carry a scenario Deadline: no wait then outlasts the
time left in the scenario's budget.
"""

import logging
import re
import time as time_module
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
)
from selenium.webdriver.support.ui import WebDriverWait

from harness.config import WaitMode, settings
from harness.providers.base import Locator, Surface

logger = logging.getLogger(__name__)

T = TypeVar("T")

HYBRID_BUFFER_SECONDS = 0.3

IGNORED_WHILE_POLLING = (NoSuchElementException, StaleElementReferenceException)

ELEMENT_CONDITIONS = ("presence", "visible", "enabled")


@dataclass(frozen=True)
class Deadline:
    """A point in time, on clock, after which a scenario's waits and retries stop."""

    expires_at: float
    clock: Callable[[], float] = field(default=time_module.monotonic, compare=False)

    @classmethod
    def after(cls, seconds: float, clock: Callable[[], float] = time_module.monotonic) -> "Deadline":
        return cls(expires_at=clock() + seconds, clock=clock)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self.clock())

    def expired(self) -> bool:
        return self.clock() >= self.expires_at


class WaitStrategy:
    """
    Provides condition waits that behave according to the configured wait mode.

    Usage:
        waits = WaitStrategy()
        button = waits.wait_for_element(surface, ("id", "submit"), condition="enabled")
        waits.wait_for_url(surface, r"/bookings/\\d+")
    """

    def __init__(
        self,
        mode: WaitMode | None = None,
        timeout: float | None = None,
        poll_interval: float | None = None,
        deadline: Deadline | None = None,
    ) -> None:
        """
        Initialize the wait strategy.

        Args:
            mode: The wait mode to use. If None, uses the configured setting.
            timeout: Default timeout ceiling in seconds for every wait.
            poll_interval: Seconds between predicate evaluations.
            deadline: Optional scenario deadline capping every ceiling.
        """
        self.mode = mode or settings.wait_mode
        self.timeout = timeout if timeout is not None else settings.default_timeout_seconds
        self.poll_interval = (
            poll_interval if poll_interval is not None else settings.poll_interval_seconds
        )
        self.deadline = deadline
        logger.debug(f"WaitStrategy initialized with mode: {self.mode.value}")

    def ceiling(self, timeout: float | None = None) -> float:
        """The timeout a wait actually gets: the requested one, cut to what is left of the deadline."""
        ceiling = self.timeout if timeout is None else timeout
        if self.deadline is not None:
            ceiling = min(ceiling, self.deadline.remaining())
        return ceiling

    def wait_until(
        self,
        condition: Callable[[], T],
        timeout: float | None = None,
        description: str = "condition",
    ) -> T:
        """
        Poll condition until it returns a truthy value.

        Lookup races (missing or stale elements) count as "not yet" rather than
        failures while polling.

        Returns:
            The first truthy value returned by condition.

        Raises:
            TimeoutException: If the condition is still falsy at the ceiling.
        """
        ceiling = self.ceiling(timeout)
        wait = WebDriverWait(
            condition,
            ceiling,
            poll_frequency=self.poll_interval,
            ignored_exceptions=IGNORED_WHILE_POLLING,
        )
        try:
            result = wait.until(lambda probe: probe(), message=f"Timed out waiting for {description}")
        except TimeoutException:
            logger.warning(f"{self.mode.value} mode: timeout after {ceiling:.1f}s waiting for {description}")
            raise
        logger.debug(f"{self.mode.value} mode: {description} met")
        self.settle()
        return result

    def wait_for_element(
        self,
        surface: Surface,
        locator: Locator,
        timeout: float | None = None,
        condition: str = "visible",
        within: Any | None = None,
    ) -> Any:
        """
        Wait for an element to reach a state.

        Args:
            surface: The automated surface
            locator: Tuple of (strategy, selector) for the element
            timeout: Ceiling in seconds; defaults to the strategy timeout
            condition: The expected condition type:
                - "presence": element is in the DOM
                - "visible": element is displayed
                - "enabled": element is displayed and accepts input
            within: Optional element to scope the lookup to

        Returns:
            The first element satisfying the condition.
        """
        if condition not in ELEMENT_CONDITIONS:
            raise ValueError(f"Unknown wait condition {condition!r}; expected one of {ELEMENT_CONDITIONS}")

        def probe() -> Any:
            for element in surface.find_all(locator, within):
                if condition == "presence":
                    return element
                if not surface.is_displayed(element):
                    continue
                if condition == "enabled" and not surface.is_enabled(element):
                    continue
                return element
            return None

        return self.wait_until(probe, timeout, f"{locator[1]} to be {condition}")

    def wait_for_hidden(
        self,
        surface: Surface,
        locator: Locator,
        timeout: float | None = None,
    ) -> bool:
        """Wait until no element matching the locator is displayed."""

        def probe() -> bool:
            return not any(surface.is_displayed(e) for e in surface.find_all(locator))

        return self.wait_until(probe, timeout, f"{locator[1]} to be hidden")

    def wait_for_url(
        self,
        surface: Surface,
        pattern: str,
        timeout: float | None = None,
    ) -> str:
        """Wait for the current URL to match a regular expression. Returns the URL."""
        compiled = re.compile(pattern)

        def probe() -> str | None:
            url = surface.current_url
            return url if compiled.search(url) else None

        return self.wait_until(probe, timeout, f"URL matching {pattern!r}")

    def wait_for_page_ready(self, surface: Surface, timeout: float | None = None) -> bool:
        return self.wait_until(surface.page_ready, timeout, "page to finish loading")

    def settle(self) -> None:
        """Short buffer after a condition is met. Only HYBRID mode sleeps."""
        if self.mode == WaitMode.HYBRID:
            logger.debug(f"HYBRID mode: adding {HYBRID_BUFFER_SECONDS}s buffer")
            time_module.sleep(HYBRID_BUFFER_SECONDS)


def get_wait_strategy(mode: WaitMode | None = None) -> WaitStrategy:
    """
    Factory function to get a WaitStrategy instance.

    Args:
        mode: Optional wait mode override. If None, uses configured setting.

    Returns:
        A WaitStrategy instance configured with the specified mode.
    """
    return WaitStrategy(mode)
