import pytest

from harness.config import BackoffMode, WaitMode
from harness.providers.retry import Backoff
from harness.providers.wait_helper import WaitStrategy
from harness.services.handoff_store import HandoffStore
from tests.fixtures.fake_surface import FakeSurface


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def waits() -> WaitStrategy:
    """Short ceilings so timeout paths finish quickly."""
    return WaitStrategy(mode=WaitMode.EVENT_DRIVEN, timeout=0.3, poll_interval=0.01)


@pytest.fixture
def no_backoff() -> Backoff:
    return Backoff(base_seconds=0.0, mode=BackoffMode.FIXED)


@pytest.fixture
def store(tmp_path) -> HandoffStore:
    return HandoffStore(tmp_path / "handoff")
