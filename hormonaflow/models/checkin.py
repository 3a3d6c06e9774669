"""Pydantic models for check-ins: quick mood notes, food intake, body/period notes."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import ConfigDict, Field, model_validator

from hormonaflow.models.base import HormonaBase


# ---------- Enums ----------

class CheckInType(str, Enum):
    quick = "quick"
    food = "food"
    body = "body"


class FoodDensity(str, Enum):
    light = "ligera"
    medium = "media"
    dense = "densa"


class ProteinLevel(str, Enum):
    low = "baja"
    medium = "media"
    high = "alta"


class SweetsLevel(str, Enum):
    none = "nada"
    some = "algo"
    lots = "mucho"


class FoodSensation(str, Enum):
    satisfied = "saciada"
    craving = "con antojo"
    heavy = "pesada"
    energized = "con energía"


class FlowIntensity(str, Enum):
    spotting = "spotting"
    light = "light"
    medium = "medium"
    heavy = "heavy"


# ---------- Payloads ----------

class QuickPayload(HormonaBase):
    hunger: int = Field(ge=1, le=10)
    energy: int = Field(ge=1, le=10)
    mood: int = Field(ge=1, le=10)
    note: str | None = None


class FoodPayload(HormonaBase):
    density: FoodDensity
    protein: ProteinLevel
    sweets: SweetsLevel
    sensation: FoodSensation
    weight: float | None = None
    note: str | None = None


class BodyPayload(HormonaBase):
    period_day_one: bool | None = None
    flow_intensity: FlowIntensity | None = None
    symptoms: list[str] = Field(default_factory=list)
    note: str | None = None


CheckInPayload = Union[QuickPayload, FoodPayload, BodyPayload]

PAYLOAD_TYPES: dict[CheckInType, type[HormonaBase]] = {
    CheckInType.quick: QuickPayload,
    CheckInType.food: FoodPayload,
    CheckInType.body: BodyPayload,
}


# ---------- Check-ins ----------

class CheckInInput(HormonaBase):
    """A check-in as submitted by the user, before it has an id or timestamp.

    The payload is parsed against the model selected by ``type``; a payload
    that does not match its declared type fails validation here rather than
    deeper in the log.
    """

    type: CheckInType
    payload: CheckInPayload

    @model_validator(mode="before")
    @classmethod
    def _payload_matches_type(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw_type = data.get("type")
        payload = data.get("payload")
        try:
            payload_cls = PAYLOAD_TYPES[CheckInType(raw_type)]
        except ValueError:
            return data
        if isinstance(payload, dict):
            data = {**data, "payload": payload_cls.model_validate(payload)}
        elif payload is not None and not isinstance(payload, payload_cls):
            raise ValueError(
                f"payload {type(payload).__name__} does not match check-in type {raw_type!r}"
            )
        return data


class CheckIn(CheckInInput):
    """A logged check-in.  Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    timestamp: int

    @property
    def is_period_start(self) -> bool:
        return (
            self.type == CheckInType.body
            and isinstance(self.payload, BodyPayload)
            and bool(self.payload.period_day_one)
        )
