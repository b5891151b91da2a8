import logging
from typing import Any

from selenium.common.exceptions import TimeoutException

from harness.providers.base import Locator, Surface
from harness.providers.dom_schema import DOM, button_named
from harness.providers.retry import Backoff, retry_call
from harness.providers.wait_helper import WaitStrategy

logger = logging.getLogger(__name__)


class ModalHelper:
    """Open, sync, submit and close Ant Design modal dialogs."""

    def __init__(
        self,
        surface: Surface,
        waits: WaitStrategy | None = None,
        max_attempts: int | None = None,
        backoff: Backoff | None = None,
    ) -> None:
        self.surface = surface
        self.waits = waits or WaitStrategy()
        self.max_attempts = max_attempts
        self.backoff = backoff

    def _visible_modals(self, title: str | None = None) -> list[Any]:
        modals = [m for m in self.surface.find_all(DOM.MODAL.wrap) if self.surface.is_displayed(m)]
        if title:
            modals = [m for m in modals if title in self.surface.text_of(m)]
        return modals

    def wait_for_modal(self, title: str | None = None, timeout: float | None = None) -> Any:
        """
        Wait for a modal to be visible.

        Args:
            title: Text that identifies the modal (e.g. its title). If None, the first visible modal.
            timeout: Ceiling in seconds

        Returns:
            The modal element.
        """
        label = f"modal '{title}'" if title else "a modal"
        return self.waits.wait_until(
            lambda: next(iter(self._visible_modals(title)), None), timeout, label
        )

    def is_modal_visible(self, title: str | None = None) -> bool:
        return bool(self._visible_modals(title))

    def close_modal(self, title: str, timeout: float | None = None) -> None:
        """Close the modal identified by title with its X button and wait for it to disappear."""
        logger.info(f"Closing {title} modal...")
        modal = self.wait_for_modal(title, timeout)
        close_button = self.waits.wait_for_element(
            self.surface, DOM.MODAL.close_button, timeout, within=modal
        )
        self.surface.click(close_button)
        self.waits.wait_until(lambda: not self.is_modal_visible(title), timeout, f"modal '{title}' to close")
        logger.info(f"{title} modal closed")

    def sync_modal(self, modal: Any, description: str = "modal") -> bool:
        """
        Click the sync button inside a modal.

        The button re-renders while the modal refreshes, so the click is retried.

        Returns:
            True if a sync button was found and clicked, False if the modal has none.
        """
        buttons = [
            b for b in self.surface.find_all(DOM.MODAL.sync_button, within=modal)
            if self.surface.is_displayed(b)
        ]
        if not buttons:
            logger.info(f"Sync button not found in {description}")
            return False

        def click_sync() -> None:
            button = self.waits.wait_for_element(
                self.surface, DOM.MODAL.sync_button, condition="enabled", within=modal
            )
            self.surface.click(button)

        retry_call(
            click_sync,
            max_attempts=self.max_attempts,
            backoff=self.backoff,
            description=f"sync {description}",
            deadline=self.waits.deadline,
        )
        logger.info(f"{description} synced")
        return True

    def submit_modal(
        self,
        button: str | Locator = "Submit",
        wait_for_validation: bool = False,
        validation_timeout: float = 10.0,
    ) -> None:
        """
        Submit a modal form.

        Args:
            button: Button text, or a locator tuple
            wait_for_validation: Wait for the button to become enabled (form validation done)
            validation_timeout: Ceiling for the validation wait
        """
        locator = button_named(button) if isinstance(button, str) else button
        logger.info(f"Submitting modal with button: {locator[1]}")
        condition = "enabled" if wait_for_validation else "visible"
        try:
            submit = self.waits.wait_for_element(
                self.surface, locator, validation_timeout, condition=condition
            )
        except TimeoutException:
            logger.error(f"Submit button {locator[1]} never became {condition}")
            raise
        self.surface.click(submit)
        logger.info("Modal submitted")

    def confirm(self, timeout: float | None = None) -> None:
        """Answer Yes on a confirmation popover."""
        yes = self.waits.wait_for_element(self.surface, DOM.MODAL.confirm_yes, timeout, condition="enabled")
        self.surface.click(yes)
        self.waits.wait_for_hidden(self.surface, DOM.MODAL.confirm_yes, timeout)
