"""Apply a health-data import to the user state.

Imported data is authoritative: on success the period history and cycle
length are replaced outright (no merge), the synced flag is set and the sync
time recorded, all in one synchronous block after the source resolves.  If
the user logged a period start while the import was pending, the import
still wins.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable

from hormonaflow.cycle.adapters.base import HealthDataSource, HealthImportResult
from hormonaflow.cycle.config_loader import HealthImportConfig, get_tracking_config
from hormonaflow.cycle.period_history import replace_history
from hormonaflow.models.base import now_ms
from hormonaflow.models.state import UserState

if TYPE_CHECKING:
    from hormonaflow.services.storage import StateStore

logger = logging.getLogger("hormonaflow.cycle.health_sync")


class HealthSyncError(RuntimeError):
    """Raised when the health source does not answer within the timeout."""


class HealthSyncService:
    """Pull cycle data from a health source into a ``UserState``.

    Args:
        state:  The state container to update.
        source: Where the data comes from.
        store:  Where to persist a snapshot after the sync (optional).
        config: Import settings; ``timeout_seconds`` of None waits forever.
                Defaults to the ``health_import`` section of tracking_config.yaml.
        clock:  Returns the current time in epoch ms.
    """

    def __init__(
        self,
        state: UserState,
        source: HealthDataSource,
        store: StateStore | None = None,
        config: HealthImportConfig | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._state = state
        self._source = source
        self._store = store
        self._timeout = (config or get_tracking_config().health_import).timeout_seconds
        self._clock = clock

    async def sync(self) -> None:
        """Fetch from the source and replace local cycle data with it.

        Raises:
            HealthSyncError: If a timeout is configured and the source
                             does not answer in time.  State is unchanged.
        """
        logger.info("Starting health sync from %s", self._source.DISPLAY_NAME or "source")
        fetch = self._source.fetch_cycle_data()
        if self._timeout is None:
            result = await fetch
        else:
            try:
                result = await asyncio.wait_for(fetch, timeout=self._timeout)
            except asyncio.TimeoutError as exc:
                raise HealthSyncError(
                    f"{self._source.DISPLAY_NAME or 'Health source'} did not answer "
                    f"within {self._timeout:.1f}s"
                ) from exc
        self.apply(result)

    def apply(self, result: HealthImportResult) -> None:
        """Replace period history and cycle length with an import result."""
        state = self._state
        previous = len(state.period_history)

        state.period_history = replace_history(result.period_starts)
        state.preferences = state.preferences.model_copy(
            update={
                "cycle_length": result.average_cycle_length,
                "is_health_synced": True,
                "last_sync_timestamp": self._clock(),
            }
        )

        logger.info(
            "Health sync applied: %d period start(s) replaced %d, cycle length %d",
            len(state.period_history),
            previous,
            result.average_cycle_length,
        )
        if self._store is not None:
            self._store.save(state)
