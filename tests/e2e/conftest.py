"""
Fixtures for live runs against the application.

These tests need BOT_EMAIL and BOT_PASSWORD (in the environment or .env) and a
Chrome install. Without credentials every test here is skipped.
"""

import pytest

from harness.config import settings
from harness.providers.selenium_surface import open_surface
from harness.services.handoff_store import HandoffStore
from harness.services.scenario_runner import ScenarioRunner


@pytest.fixture(autouse=True)
def require_credentials() -> None:
    if not settings.credentials_configured():
        pytest.skip("BOT_EMAIL and BOT_PASSWORD are not configured")


@pytest.fixture(scope="session")
def handoff_store() -> HandoffStore:
    """The shared store, so groups run in separate pytest invocations still hand off."""
    return HandoffStore()


@pytest.fixture
def runner(handoff_store: HandoffStore) -> ScenarioRunner:
    return ScenarioRunner(open_surface, store=handoff_store)
