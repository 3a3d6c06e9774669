"""Tests for profile and preference updates."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from hormonaflow.config import Settings
from hormonaflow.models.state import Language, Theme, UserState
from hormonaflow.services.profile import ProfileService
from hormonaflow.services.storage import InMemoryStore, StateStore


@pytest.fixture
def profile(state: UserState, state_store: StateStore) -> ProfileService:
    return ProfileService(state, state_store)


def saved(kv: InMemoryStore, settings: Settings) -> dict:
    return json.loads(kv.get(settings.storage_key))


class TestProfileService:
    def test_set_language(self, profile, state, kv, settings) -> None:
        profile.set_language("en")
        assert state.language == Language.en
        assert saved(kv, settings)["language"] == "en"

    def test_unknown_language_rejected(self, profile) -> None:
        with pytest.raises(ValueError):
            profile.set_language("fr")

    def test_toggle_theme(self, profile, state, kv, settings) -> None:
        assert profile.toggle_theme() == Theme.dark
        assert saved(kv, settings)["preferences"]["theme"] == "dark"
        assert profile.toggle_theme() == Theme.light
        assert state.preferences.theme == Theme.light

    def test_update_user(self, profile, state, kv, settings) -> None:
        profile.update_user("Ana", "Runner", ["pcos", "thyroid"])
        assert state.name == "Ana"
        assert state.preferences.bio == "Runner"
        assert state.preferences.conditions == ["pcos", "thyroid"]
        assert saved(kv, settings)["preferences"]["conditions"] == ["pcos", "thyroid"]

    def test_update_user_leaves_cycle_data(self, profile, state) -> None:
        state.period_history = [5, 1]
        profile.update_user("Ana", "", [])
        assert state.period_history == [5, 1]
        assert state.preferences.cycle_length == 28

    def test_set_cycle_length(self, profile, state, kv, settings) -> None:
        profile.set_cycle_length(32)
        assert state.preferences.cycle_length == 32
        assert saved(kv, settings)["preferences"]["cycleLength"] == 32

    @pytest.mark.parametrize("length", [0, -1])
    def test_non_positive_cycle_length_rejected(self, profile, state, length: int) -> None:
        with pytest.raises(ValidationError):
            profile.set_cycle_length(length)
        assert state.preferences.cycle_length == 28

    def test_logout_forgets_user_only(self, profile, kv, settings) -> None:
        kv.set(settings.user_key, "Ana")
        profile.update_user("Ana", "", [])
        profile.logout()
        assert kv.get(settings.user_key) is None
        assert saved(kv, settings)["name"] == "Ana"

    def test_without_store(self, state) -> None:
        ProfileService(state).toggle_theme()
        assert state.preferences.theme == Theme.dark
