"""Simulated Apple HealthKit bridge.

Apple offers no server-side API; a native app would read HealthKit and push
the data over.  Until that bridge exists this source answers after a short
delay with period starts a fixed number of days in the past, taken from the
``health_import`` section of tracking_config.yaml.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from hormonaflow.cycle.adapters.base import HealthDataSource, HealthImportResult
from hormonaflow.cycle.config_loader import HealthImportConfig, get_tracking_config
from hormonaflow.models.base import MS_PER_DAY, now_ms

logger = logging.getLogger("hormonaflow.cycle.adapters.apple_health")


class SimulatedAppleHealthSource(HealthDataSource):
    """HealthKit stand-in that reports a fixed recent history."""

    SOURCE_ID = "apple_health"
    DISPLAY_NAME = "Apple Health"

    def __init__(
        self,
        config: HealthImportConfig | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._config = config or get_tracking_config().health_import
        self._clock = clock

    async def fetch_cycle_data(self) -> HealthImportResult:
        cfg = self._config
        logger.debug("Apple Health: waiting %.1fs for bridge", cfg.delay_seconds)
        await asyncio.sleep(cfg.delay_seconds)

        now = self._clock()
        starts = [now - offset * MS_PER_DAY for offset in cfg.period_offsets_days]
        logger.info(
            "Apple Health: %d period start(s), average cycle %d days",
            len(starts),
            cfg.average_cycle_length,
        )
        return HealthImportResult(
            period_starts=starts,
            average_cycle_length=cfg.average_cycle_length,
        )
