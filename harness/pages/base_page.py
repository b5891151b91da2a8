import logging
from pathlib import Path
from typing import Any

from harness.config import settings
from harness.providers.base import Locator, Surface
from harness.providers.dropdown_helper import DropdownHelper
from harness.providers.modal_helper import ModalHelper
from harness.providers.wait_helper import WaitStrategy

logger = logging.getLogger(__name__)


class BasePage:
    """Common page-object operations shared by every screen."""

    def __init__(self, surface: Surface, waits: WaitStrategy | None = None) -> None:
        self.surface = surface
        self.waits = waits or WaitStrategy()
        self.dropdowns = DropdownHelper(surface, self.waits)
        self.modals = ModalHelper(surface, self.waits)

    def goto(self, path: str = "/") -> None:
        """Navigate to a path relative to the base URL (or an absolute URL)."""
        self.surface.navigate(path)
        self.wait_for_page_load()

    def wait_for_page_load(self, timeout: float | None = None) -> None:
        self.waits.wait_for_page_ready(self.surface, timeout)

    def wait_for_element(self, locator: Locator, timeout: float | None = None) -> Any:
        return self.waits.wait_for_element(self.surface, locator, timeout)

    def click(self, locator: Locator, timeout: float | None = None) -> None:
        """Wait for the element to accept input, then click it."""
        element = self.waits.wait_for_element(self.surface, locator, timeout, condition="enabled")
        self.surface.click(element)

    def fill(self, locator: Locator, text: str, timeout: float | None = None) -> None:
        element = self.waits.wait_for_element(self.surface, locator, timeout, condition="enabled")
        self.surface.fill(element, text)

    def is_visible(self, locator: Locator) -> bool:
        return any(self.surface.is_displayed(e) for e in self.surface.find_all(locator))

    def get_current_url(self) -> str:
        return self.surface.current_url

    def take_screenshot(self, name: str) -> Path:
        path = Path(settings.screenshot_dir) / f"{name}.png"
        self.surface.screenshot(str(path))
        logger.info(f"Screenshot saved: {path}")
        return path
