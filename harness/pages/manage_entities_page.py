import logging
from collections.abc import Iterable

from selenium.common.exceptions import TimeoutException, WebDriverException

from harness.errors import HarnessError
from harness.models.schemas import EntityData, EntitySweepResult
from harness.pages.base_page import BasePage
from harness.providers.dom_schema import DOM, link_named

logger = logging.getLogger(__name__)

URL_TIMEOUT_SECONDS = 2.0
CONTENT_TIMEOUT_SECONDS = 3.0


class ManageEntitiesPage(BasePage):
    """User menu > Manage, and every entity screen listed there."""

    def navigate_to_manage(self) -> None:
        menu = DOM.MANAGE.user_menu if self.is_visible(DOM.MANAGE.user_menu) else DOM.LEGACY.user_menu_icon
        self.click(menu)
        self.click(DOM.MANAGE.manage_link)
        self.wait_for_page_load()
        logger.info("Navigated to Manage")

    def navigate_to_entity(self, entity: EntityData) -> None:
        self.click(link_named(entity.link_name, exact=entity.exact_link))
        try:
            self.waits.wait_for_url(self.surface, entity.url, URL_TIMEOUT_SECONDS)
        except TimeoutException:
            # Some entities redirect to a sub-path with a different slug.
            logger.warning(f"{entity.name}: URL did not match {entity.url}, continuing")

    def verify_entity_page_displays(self, entity: EntityData) -> None:
        """
        Raises:
            TimeoutException: No content region became visible.
        """
        self.wait_for_element(DOM.MANAGE.content, CONTENT_TIMEOUT_SECONDS)

    def has_table_data(self) -> bool:
        return self.is_visible(DOM.MANAGE.table_row)

    def has_list_data(self) -> bool:
        return self.is_visible(DOM.MANAGE.list_item)

    def has_card_data(self) -> bool:
        return self.is_visible(DOM.MANAGE.card)

    def verify_entity_has_data(self, entity: EntityData) -> bool:
        """True if the entity shows a table row, list item or card."""
        return self.has_table_data() or self.has_list_data() or self.has_card_data()

    def visit_and_verify_entity(self, entity: EntityData) -> bool:
        """Open the entity and check it displays. Returns whether it shows any data."""
        self.navigate_to_entity(entity)
        self.verify_entity_page_displays(entity)
        return self.verify_entity_has_data(entity)

    def visit_all(self, entities: Iterable[EntityData]) -> EntitySweepResult:
        """
        Visit each entity in turn, recording failures instead of stopping.

        An entity that displays but has no rows counts as visited; empty
        entities are listed separately.
        """
        result = EntitySweepResult()
        for entity in entities:
            try:
                has_data = self.visit_and_verify_entity(entity)
            except (WebDriverException, HarnessError) as e:
                logger.error(f"Failed to verify {entity.name}: {e}")
                result.failed.append(entity.name)
                continue
            result.visited.append(entity.name)
            if not has_data:
                result.empty.append(entity.name)
        logger.info(
            f"Manage sweep: {len(result.visited)}/{result.total} entities displayed "
            f"({len(result.empty)} empty, {len(result.failed)} failed)"
        )
        return result
