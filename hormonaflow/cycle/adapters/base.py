"""Base class and result model for health-data sources.

A source reports the user's recent period starts and their average cycle
length.  The sync service treats whatever a source returns as authoritative.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from pydantic import Field

from hormonaflow.models.base import HormonaBase

logger = logging.getLogger("hormonaflow.cycle.adapters")


class HealthImportResult(HormonaBase):
    """What a health-data source hands back after a successful fetch.

    Attributes:
        period_starts:        Period-start timestamps in epoch ms.
        average_cycle_length: The source's average cycle length in days.
    """

    period_starts: list[int] = Field(default_factory=list)
    average_cycle_length: int = Field(gt=0)


class HealthDataSource(ABC):
    """Abstract base for every health-data bridge."""

    SOURCE_ID: str = ""
    DISPLAY_NAME: str = ""

    @abstractmethod
    async def fetch_cycle_data(self) -> HealthImportResult:
        """Fetch period starts and average cycle length.

        Runs to completion once started; there is no cancellation hook.
        """
