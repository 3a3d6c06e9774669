"""Shared fixtures for cycle tracking tests."""

from __future__ import annotations

import pytest

from hormonaflow.config import Settings
from hormonaflow.cycle.config_loader import TrackingConfig, load_tracking_config
from hormonaflow.models.base import MS_PER_DAY
from hormonaflow.models.state import UserState
from hormonaflow.services.storage import InMemoryStore, StateStore

# 2026-02-23T12:00:00Z
TEST_NOW = 1_771_848_000_000
DAY = MS_PER_DAY


class FakeClock:
    """Deterministic ms clock.  Each call returns the current value."""

    def __init__(self, start: int = TEST_NOW) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class SequentialIds:
    def __init__(self) -> None:
        self._n = 0

    def __call__(self) -> str:
        self._n += 1
        return f"checkin-{self._n}"


# ---------------------------------------------------------------------------
# Config / state fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tracking_config() -> TrackingConfig:
    """Load the bundled tracking config."""
    return load_tracking_config()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(_env_file=None, state_file=tmp_path / "state.json")


@pytest.fixture
def state() -> UserState:
    return UserState()


@pytest.fixture
def kv() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def state_store(kv: InMemoryStore, settings: Settings) -> StateStore:
    return StateStore(kv, settings)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()
