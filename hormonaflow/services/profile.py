"""Profile and preference updates: language, theme, name/bio/conditions, cycle length."""

from __future__ import annotations

import logging

from hormonaflow.models.state import Language, Theme, UserState
from hormonaflow.services.storage import StateStore

logger = logging.getLogger("hormonaflow.profile")


class ProfileService:
    """Mutate the non-cycle parts of a ``UserState`` and persist each change."""

    def __init__(self, state: UserState, store: StateStore | None = None) -> None:
        self._state = state
        self._store = store

    def _persist(self) -> None:
        if self._store is not None:
            self._store.save(self._state)

    def set_language(self, language: Language | str) -> None:
        self._state.language = Language(language)
        self._persist()

    def toggle_theme(self) -> Theme:
        """Flip between light and dark; returns the new theme."""
        prefs = self._state.preferences
        prefs.theme = Theme.dark if prefs.theme == Theme.light else Theme.light
        self._persist()
        return prefs.theme

    def update_user(self, name: str, bio: str, conditions: list[str]) -> None:
        self._state.name = name
        prefs = self._state.preferences
        prefs.bio = bio
        prefs.conditions = list(conditions)
        self._persist()

    def set_cycle_length(self, cycle_length: int) -> None:
        """Set the expected cycle length.

        Raises:
            pydantic.ValidationError: If cycle_length is not positive.
        """
        self._state.preferences.cycle_length = cycle_length
        logger.info("Cycle length set to %d days", cycle_length)
        self._persist()

    def logout(self) -> None:
        """Forget the signed-in user name.  Logged data stays on the device."""
        if self._store is not None:
            self._store.clear_user()
        logger.info("User %r logged out", self._state.name)
