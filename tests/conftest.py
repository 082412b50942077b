import pytest
from typer.testing import CliRunner

from tiercache.domain.interfaces.clock import Clock
from tiercache.domain.models.common import Timestamp
from tiercache.infrastructure.cache.memory_cache import InMemoryCacheStore
from tiercache.infrastructure.config.settings import clear_test_config, set_config_for_testing
from tiercache.main import reset_dependencies


class ManualClock(Clock):
    """Clock that only moves when a test advances it."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.current = start

    def now(self) -> Timestamp:
        return Timestamp(self.current)

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def store(clock):
    """A fresh cache store driven by the manual clock."""
    return InMemoryCacheStore(clock=clock)


@pytest.fixture(autouse=True)
def isolated_app_state():
    """Each test gets its own composition root and no background sweep."""
    reset_dependencies()
    set_config_for_testing({'cache.sweep_interval_seconds': 0})
    yield
    clear_test_config()
    reset_dependencies()
