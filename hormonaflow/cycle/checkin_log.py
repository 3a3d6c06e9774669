"""Append-only check-in log.

Every submitted check-in gets a fresh id and timestamp and goes to the front
of ``state.logs``.  A body check-in flagged as period day one also records its
timestamp in ``state.period_history``; the two lists are updated together so
nobody reading the state sees one change without the other.

Usage::

    log = CheckInLog(state, store=state_store)
    entry = log.append(CheckInInput(type="body", payload={"periodDayOne": True}))
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Callable

from hormonaflow.cycle.period_history import record_period_start
from hormonaflow.models.base import now_ms
from hormonaflow.models.checkin import CheckIn, CheckInInput
from hormonaflow.models.state import UserState

if TYPE_CHECKING:
    from hormonaflow.services.storage import StateStore

logger = logging.getLogger("hormonaflow.cycle.checkin_log")


def _new_id() -> str:
    return str(uuid.uuid4())


class CheckInLog:
    """Owns appends to a caller-supplied ``UserState``.

    Args:
        state:      The state container to mutate.
        store:      Where to persist a snapshot after each append (optional).
        clock:      Returns the current time in epoch ms.
        id_factory: Returns a new unique id per call.
    """

    def __init__(
        self,
        state: UserState,
        store: StateStore | None = None,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._state = state
        self._store = store
        self._clock = clock
        self._id_factory = id_factory

    @property
    def entries(self) -> tuple[CheckIn, ...]:
        """All check-ins, most recent first."""
        return tuple(self._state.logs)

    def __len__(self) -> int:
        return len(self._state.logs)

    def latest(self) -> CheckIn | None:
        return self._state.logs[0] if self._state.logs else None

    def append(self, entry: CheckInInput) -> CheckIn:
        """Record a check-in.

        Args:
            entry: The submitted check-in (type + payload).

        Returns:
            The stored CheckIn with its assigned id and timestamp.
        """
        record = CheckIn(
            id=self._id_factory(),
            timestamp=self._clock(),
            type=entry.type,
            payload=entry.payload,
        )

        logs = [record, *self._state.logs]
        history = self._state.period_history
        if record.is_period_start:
            history = record_period_start(history, record.timestamp)
            logger.info("Period start recorded at %d", record.timestamp)

        self._state.logs = logs
        self._state.period_history = history

        logger.debug("Appended %s check-in %s", record.type.value, record.id)

        if self._store is not None:
            self._store.save(self._state)
        return record
