"""Key-value persistence for the user state snapshot.

The app keeps its whole state as one JSON document under a single key, the
way a browser client keeps it in ``localStorage``.  ``JsonFileStore`` mirrors
that on disk: one JSON object mapping keys to string values.

Usage::

    store = StateStore(JsonFileStore(settings.state_file), settings)
    state = store.load()
    ...
    store.save(state)
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from hormonaflow.config import Settings, get_settings
from hormonaflow.cycle.config_loader import get_tracking_config
from hormonaflow.models.state import Language, UserPreferences, UserState

logger = logging.getLogger("hormonaflow.storage")


# ---------------------------------------------------------------------------
# Key-value backends
# ---------------------------------------------------------------------------


class KeyValueStore(ABC):
    """Minimal string key → string value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for ``key`` or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``.  Removing a missing key is a no-op."""


class InMemoryStore(KeyValueStore):
    """Process-local store, used in tests and for throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStore(KeyValueStore):
    """File-backed store: the whole key space is one JSON object on disk.

    Every ``set``/``remove`` rewrites the file via a temporary sibling and an
    atomic rename, so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False)
        tmp.replace(self._path)

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


# ---------------------------------------------------------------------------
# State snapshot
# ---------------------------------------------------------------------------


class StateStore:
    """Load and save the full ``UserState`` snapshot through a key-value store."""

    def __init__(self, kv: KeyValueStore, settings: Settings | None = None) -> None:
        self._kv = kv
        self._settings = settings or get_settings()

    @property
    def kv(self) -> KeyValueStore:
        return self._kv

    def default_state(self) -> UserState:
        """State for a first launch: no logs, no history, default preferences."""
        s = self._settings
        return UserState(
            language=Language(s.default_language),
            name=self._kv.get(s.user_key) or s.default_user_name,
            preferences=UserPreferences(
                cycle_length=get_tracking_config().cycle.default_length,
            ),
        )

    def load(self) -> UserState:
        """Return the persisted state, or a fresh default if none is stored.

        An unreadable snapshot is copied verbatim to ``backup_key`` before
        the default state is returned, so the next save cannot destroy it.
        """
        raw = self._kv.get(self._settings.storage_key)
        if raw is None:
            logger.info("No saved state under %r; starting fresh", self._settings.storage_key)
            return self.default_state()
        try:
            return UserState.model_validate_json(raw)
        except ValidationError as exc:
            self._kv.set(self.backup_key, raw)
            logger.warning(
                "Saved state under %r is unreadable (%d error(s)); copied to %r, starting fresh",
                self._settings.storage_key,
                exc.error_count(),
                self.backup_key,
            )
            return self.default_state()

    @property
    def backup_key(self) -> str:
        """Key an unreadable snapshot is preserved under."""
        return f"{self._settings.storage_key}.corrupt"

    def save(self, state: UserState) -> None:
        """Write a complete snapshot of ``state``."""
        payload = json.dumps(state.to_wire(), ensure_ascii=False)
        self._kv.set(self._settings.storage_key, payload)
        logger.debug(
            "Saved state: %d log(s), %d period start(s)",
            len(state.logs),
            len(state.period_history),
        )

    def clear_user(self) -> None:
        """Forget the signed-in user name; the snapshot itself is kept."""
        self._kv.remove(self._settings.user_key)
