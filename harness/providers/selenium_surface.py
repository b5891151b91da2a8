import logging
import os
from pathlib import Path
from typing import Any

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.chrome.webdriver import WebDriver
from webdriver_manager.chrome import ChromeDriverManager

from harness.config import settings
from harness.providers.base import Locator, Surface

logger = logging.getLogger(__name__)


def create_driver(headless: bool | None = None) -> webdriver.Chrome:
    """Create a Chrome WebDriver instance configured from settings."""
    options = Options()
    if settings.headless if headless is None else headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")
    options.add_argument(f"--window-size={settings.window_size}")

    # Check for ChromeDriver path from settings first,
    # then fall back to ChromeDriverManager for automatic version management
    chromedriver_path = settings.chromedriver_path or os.environ.get("CHROMEDRIVER_PATH")
    if chromedriver_path and os.path.exists(chromedriver_path):
        service = Service(chromedriver_path)
    else:
        service = Service(ChromeDriverManager().install())
    return webdriver.Chrome(service=service, options=options)


class SeleniumSurface(Surface):
    """Surface backed by a Selenium WebDriver. Relative URLs resolve against base_url."""

    def __init__(self, driver: WebDriver, base_url: str | None = None) -> None:
        self.driver = driver
        self.base_url = base_url or settings.base_url

    def __enter__(self) -> "SeleniumSurface":
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()

    def navigate(self, url: str) -> None:
        target = self.base_url.rstrip("/") + url if url.startswith("/") else url
        logger.debug(f"Navigating to {target}")
        self.driver.get(target)

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    def find_all(self, locator: Locator, within: Any | None = None) -> list[Any]:
        root = within if within is not None else self.driver
        return list(root.find_elements(*locator))

    def find(self, locator: Locator, within: Any | None = None) -> Any:
        root = within if within is not None else self.driver
        return root.find_element(*locator)

    def click(self, element: Any) -> None:
        element.click()

    def fill(self, element: Any, text: str) -> None:
        element.clear()
        element.send_keys(text)

    def text_of(self, element: Any) -> str:
        # .text is empty for elements scrolled out of a virtual list; textContent is not
        return element.text or element.get_attribute("textContent") or ""

    def attribute_of(self, element: Any, name: str) -> str | None:
        return element.get_attribute(name)

    def is_displayed(self, element: Any) -> bool:
        return element.is_displayed()

    def is_enabled(self, element: Any) -> bool:
        return element.is_enabled() and element.get_attribute("aria-disabled") != "true"

    def page_ready(self) -> bool:
        return self.driver.execute_script("return document.readyState") == "complete"

    def reload(self) -> None:
        self.driver.refresh()

    def screenshot(self, path: str) -> bool:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        try:
            return self.driver.save_screenshot(path)
        except WebDriverException as e:
            logger.warning(f"Could not save screenshot {path}: {e}")
            return False

    def close(self) -> None:
        try:
            self.driver.quit()
        except WebDriverException as e:
            logger.warning(f"Error closing WebDriver: {e}")


def open_surface(headless: bool | None = None) -> SeleniumSurface:
    """Start a browser session and wrap it. Each scenario owns its own session."""
    return SeleniumSurface(create_driver(headless))
