"""Shared fixtures for persistence and profile tests."""

from __future__ import annotations

import pytest

from hormonaflow.config import Settings
from hormonaflow.models.state import UserState
from hormonaflow.services.storage import InMemoryStore, StateStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(_env_file=None, state_file=tmp_path / "state.json")


@pytest.fixture
def kv() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def state_store(kv: InMemoryStore, settings: Settings) -> StateStore:
    return StateStore(kv, settings)


@pytest.fixture
def state() -> UserState:
    return UserState()
