"""
DropdownHelper - reusable interaction with Ant Design select dropdowns.

Selection is split into three steps: read the labels of the single open
dropdown, match the target deterministically, click the matched element.
Options that are still loading are waited for; ties are failed immediately.
"""

import logging
from typing import Any

from selenium.common.exceptions import StaleElementReferenceException, TimeoutException

from harness.errors import NoActiveSurfaceError, OptionNotFoundError
from harness.models.results import Found, NotFound, OptionSnapshot
from harness.providers.base import Locator, Surface
from harness.providers.option_reader import OptionSnapshotReader
from harness.providers.retry import Backoff, retry_call
from harness.providers.wait_helper import WaitStrategy
from harness.services.option_matcher import match_option

logger = logging.getLogger(__name__)

CLOSE_TIMEOUT_SECONDS = 2.0


class DropdownHelper:
    """
    Usage:
        dropdowns = DropdownHelper(surface)
        dropdowns.open_and_select(DOM.BOOKING_FORM.department, "NORTH")
    """

    def __init__(
        self,
        surface: Surface,
        waits: WaitStrategy | None = None,
        max_attempts: int | None = None,
        backoff: Backoff | None = None,
    ) -> None:
        self.surface = surface
        self.waits = waits or WaitStrategy()
        self.reader = OptionSnapshotReader(surface, self.waits)
        self.max_attempts = max_attempts
        self.backoff = backoff

    def select_option(self, value: str, timeout: float | None = None) -> str:
        """
        Select an option from the dropdown that is already open.

        Args:
            value: Target label (exact, trimmed, or unique substring)
            timeout: Ceiling for the dropdown to open and the option to render

        Returns:
            The full label of the option that was clicked.

        Raises:
            OptionNotFoundError: No unique option matched; lists every available label.
            RetryExhaustedError: The click kept failing with transient errors.
        """
        return retry_call(
            lambda: self._select_once(value, timeout),
            max_attempts=self.max_attempts,
            backoff=self.backoff,
            description=f"select option {value!r}",
            deadline=self.waits.deadline,
        )

    def open_and_select(
        self,
        trigger: Locator,
        value: str,
        search: str | None = None,
        timeout: float | None = None,
    ) -> str:
        """
        Open the dropdown behind trigger and select value.

        The trigger is clicked unless the only open dropdown is the one this
        trigger controls (its aria-controls or aria-owns names the portal's
        listbox). A dropdown left open by another field, as a multi-select is
        after a selection, is never selected from: it is ignored while waiting
        for this trigger's dropdown to open.

        Args:
            trigger: Locator of the select's clickable field
            value: Target option label
            search: Text typed into the field first, for selects that filter as you type
            timeout: Ceiling for each wait
        """

        def attempt() -> str:
            field = self.waits.wait_for_element(self.surface, trigger, timeout, condition="enabled")
            open_now = self.reader.active_containers()
            foreign = [c for c in open_now if not self.reader.belongs_to(c, field)]
            if open_now and not foreign:
                logger.debug(f"Dropdown for {trigger[1]} is already open")
            else:
                if foreign:
                    logger.warning(f"{len(foreign)} dropdown(s) of another field still open; ignoring them")
                self.surface.click(field)
                if search:
                    self.surface.fill(field, search)
            return self._select_once(value, timeout, ignore=foreign)

        return retry_call(
            attempt,
            max_attempts=self.max_attempts,
            backoff=self.backoff,
            description=f"open {trigger[1]} and select {value!r}",
            deadline=self.waits.deadline,
        )

    def get_available_options(self, timeout: float | None = None) -> list[str]:
        """Labels of the open dropdown, or an empty list when no dropdown is open."""
        try:
            return list(self.reader.read(timeout).labels)
        except NoActiveSurfaceError:
            logger.info("No open dropdown; no options available")
            return []

    def option_exists(self, value: str, timeout: float | None = None) -> bool:
        """True if any matching rule finds value among the open dropdown's options."""
        options = self.get_available_options(timeout)
        if not options:
            return False
        result = match_option(OptionSnapshot(labels=tuple(options)), value)
        return isinstance(result, Found) or bool(result.candidates)

    def _select_once(self, value: str, timeout: float | None, ignore: list[Any] | None = None) -> str:
        last_miss: NotFound | None = None

        def matched_element() -> tuple[Found, Any, Any] | None:
            nonlocal last_miss
            container = self.reader.find_active_container(timeout, ignore or ())
            snapshot, elements = self.reader.capture_from(container)
            result = match_option(snapshot, value)
            if isinstance(result, Found):
                return result, elements[result.index], container
            if result.ambiguous:
                self._log_failure(result)
                raise OptionNotFoundError(value, snapshot.labels, result.candidates)
            last_miss = result
            return None

        try:
            found, element, container = self.waits.wait_until(
                matched_element, timeout, f"option {value!r} to render"
            )
        except TimeoutException:
            if last_miss is None:
                raise
            self._log_failure(last_miss)
            raise OptionNotFoundError(value, last_miss.available.labels) from None

        self.surface.click(element)
        logger.info(f"Selected: {found.label}")
        self._wait_until_closed(container)
        return found.label

    def _wait_until_closed(self, container: Any) -> None:
        def closed() -> bool:
            try:
                return not self.reader.is_active(container)
            except StaleElementReferenceException:
                return True

        try:
            self.waits.wait_until(closed, CLOSE_TIMEOUT_SECONDS, "dropdown to close")
        except TimeoutException:
            # Multi-select dropdowns stay open after a click.
            logger.warning("Dropdown still open after selection")

    def _log_failure(self, result: NotFound) -> None:
        logger.error("Dropdown selection failed:")
        logger.error(f'   Searched for: "{result.searched}"')
        if result.candidates:
            logger.error(f"   {len(result.candidates)} options match: {list(result.candidates)}")
        logger.error(f"   Found {len(result.available)} options: {list(result.available.labels)}")
