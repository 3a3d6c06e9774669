"""Pydantic models for the per-user application state and derived cycle info."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from hormonaflow.models.base import HormonaBase
from hormonaflow.models.checkin import CheckIn

DEFAULT_CYCLE_LENGTH = 28


class Language(str, Enum):
    en = "en"
    es = "es"


class Theme(str, Enum):
    light = "light"
    dark = "dark"


class CyclePhase(str, Enum):
    menstrual = "menstrual"
    follicular = "follicular"
    ovulatory = "ovulatory"
    luteal = "luteal"


class UserPreferences(HormonaBase):
    theme: Theme = Theme.light
    bio: str = ""
    cycle_length: int = Field(default=DEFAULT_CYCLE_LENGTH, gt=0)
    conditions: list[str] = Field(default_factory=list)
    is_health_synced: bool = False
    last_sync_timestamp: int | None = None


class UserState(HormonaBase):
    """The single state container a caller owns and hands to each service.

    ``logs`` is most-recent-first; ``period_history`` is sorted descending.
    """

    language: Language = Language.es
    name: str = "User"
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    logs: list[CheckIn] = Field(default_factory=list)
    period_history: list[int] = Field(default_factory=list)


class CycleInfo(HormonaBase):
    """Where the user sits in their cycle right now.  Derived, never stored."""

    day: int
    phase: CyclePhase
    progress: float
    phase_day: int
    phase_total: int
