import logging
from collections.abc import Sequence
from typing import Any

from selenium.common.exceptions import TimeoutException

from harness.errors import AmbiguousSurfaceError, NoActiveSurfaceError
from harness.models.results import OptionSnapshot
from harness.providers.base import Surface
from harness.providers.dom_schema import DOM, DropdownSelectors, by_id
from harness.providers.wait_helper import WaitStrategy

logger = logging.getLogger(__name__)


class OptionSnapshotReader:
    """
    Reads the labels of the one dropdown portal that is currently open.

    Ant Design leaves closed portals in the DOM (hidden, or mid leave-animation),
    so several containers usually exist. Only containers that are displayed and
    carry none of the inactive classes qualify. Exactly one must qualify.
    """

    def __init__(
        self,
        surface: Surface,
        waits: WaitStrategy | None = None,
        selectors: DropdownSelectors = DOM.DROPDOWN,
    ) -> None:
        self.surface = surface
        self.waits = waits or WaitStrategy()
        self.selectors = selectors

    def is_active(self, container: Any) -> bool:
        if not self.surface.is_displayed(container):
            return False
        return not (self.surface.classes_of(container) & set(self.selectors.inactive_classes))

    def active_containers(self) -> list[Any]:
        return [c for c in self.surface.find_all(self.selectors.container) if self.is_active(c)]

    def belongs_to(self, container: Any, field: Any) -> bool:
        """
        True if container is the portal opened by the select field.

        The field's aria-controls (or aria-owns) names the listbox the portal
        renders. A field carrying neither attribute owns no portal.
        """
        for attribute in self.selectors.owner_attributes:
            list_id = self.surface.attribute_of(field, attribute)
            if list_id and self.surface.find_all(by_id(list_id), within=container):
                return True
        return False

    def find_active_container(self, timeout: float | None = None, ignore: Sequence[Any] = ()) -> Any:
        """
        Wait for exactly one active container.

        A second active container can be a portal that is still closing, so the
        wait keeps polling until one remains. Containers in ignore (dropdowns
        another field left open) never count.

        Raises:
            NoActiveSurfaceError: No container was active at the ceiling.
            AmbiguousSurfaceError: Several containers were still active at the ceiling.
        """
        last_seen: list[Any] = []
        ceiling = self.waits.ceiling(timeout)

        def single_active() -> Any:
            nonlocal last_seen
            last_seen = [c for c in self.active_containers() if c not in ignore]
            return last_seen[0] if len(last_seen) == 1 else None

        try:
            return self.waits.wait_until(single_active, ceiling, "a single open dropdown")
        except TimeoutException:
            if len(last_seen) > 1:
                logger.error(f"{len(last_seen)} dropdowns are open at once")
                raise AmbiguousSurfaceError("dropdown", len(last_seen)) from None
            raise NoActiveSurfaceError("dropdown", ceiling) from None

    def capture(self, timeout: float | None = None) -> tuple[OptionSnapshot, list[Any]]:
        """Snapshot the open dropdown."""
        return self.capture_from(self.find_active_container(timeout))

    def capture_from(self, container: Any) -> tuple[OptionSnapshot, list[Any]]:
        """
        Snapshot one container.

        Labels and element handles come from the same container read, so
        snapshot.labels[i] is the text of elements[i].
        """
        elements = self.surface.find_all(self.selectors.option, within=container)
        labels = tuple(self.surface.text_of(e) for e in elements)
        snapshot = OptionSnapshot(labels=labels)
        logger.debug(f"Captured {len(labels)} dropdown options: {list(labels)}")
        return snapshot, elements

    def read(self, timeout: float | None = None) -> OptionSnapshot:
        snapshot, _ = self.capture(timeout)
        return snapshot
