from abc import ABC, abstractmethod
from typing import Any

Locator = tuple[str, str]


class Surface(ABC):
    """
    The automated UI as seen by the harness.

    Elements are opaque handles returned by find/find_all and handed back to
    the other methods. Locators are (strategy, value) tuples using Selenium's
    By strategy names ("css selector", "xpath", "id", ...).
    """

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Load a URL in the current session."""
        pass

    @abstractmethod
    def reload(self) -> None:
        pass

    @property
    @abstractmethod
    def current_url(self) -> str:
        pass

    @abstractmethod
    def find_all(self, locator: Locator, within: Any | None = None) -> list[Any]:
        """Return every element matching the locator, optionally scoped to an element."""
        pass

    @abstractmethod
    def find(self, locator: Locator, within: Any | None = None) -> Any:
        """Return the first matching element or raise NoSuchElementException."""
        pass

    @abstractmethod
    def click(self, element: Any) -> None:
        pass

    @abstractmethod
    def fill(self, element: Any, text: str) -> None:
        """Clear the element and type text into it."""
        pass

    @abstractmethod
    def text_of(self, element: Any) -> str:
        pass

    @abstractmethod
    def attribute_of(self, element: Any, name: str) -> str | None:
        pass

    @abstractmethod
    def is_displayed(self, element: Any) -> bool:
        pass

    @abstractmethod
    def is_enabled(self, element: Any) -> bool:
        pass

    @abstractmethod
    def page_ready(self) -> bool:
        """True once the current document has finished loading."""
        pass

    @abstractmethod
    def screenshot(self, path: str) -> bool:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def exists(self, locator: Locator, within: Any | None = None) -> bool:
        return bool(self.find_all(locator, within))

    def classes_of(self, element: Any) -> set[str]:
        return set((self.attribute_of(element, "class") or "").split())
