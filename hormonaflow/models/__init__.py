"""Pydantic models shared across the HormonaFlow core."""

from hormonaflow.models.base import MS_PER_DAY, HormonaBase, now_ms
from hormonaflow.models.checkin import (
    BodyPayload,
    CheckIn,
    CheckInInput,
    CheckInType,
    FoodPayload,
    QuickPayload,
)
from hormonaflow.models.state import (
    CycleInfo,
    CyclePhase,
    Language,
    Theme,
    UserPreferences,
    UserState,
)

__all__ = [
    "MS_PER_DAY",
    "HormonaBase",
    "now_ms",
    "BodyPayload",
    "CheckIn",
    "CheckInInput",
    "CheckInType",
    "FoodPayload",
    "QuickPayload",
    "CycleInfo",
    "CyclePhase",
    "Language",
    "Theme",
    "UserPreferences",
    "UserState",
]
