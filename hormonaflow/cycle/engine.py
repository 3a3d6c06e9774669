"""Cycle phase inference.

Derives where the user is in their cycle from the most recent recorded
period start, the configured cycle length, and the current time:

- elapsed whole days since the last period start (day one counts as 1)
- cycle day, wrapped modulo the cycle length
- phase, day within the phase, and phase length
- overall progress through the cycle

Phase bands are fixed day ranges sized for a 28-day cycle and are NOT
rescaled for other cycle lengths.  A 35-day cycle spends days 18–35 in the
luteal band (phase day up to 18 of 11); a 16-day cycle never leaves the
follicular band.  Everything here is a pure function of its arguments.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from hormonaflow.cycle.config_loader import get_tracking_config
from hormonaflow.cycle.period_history import latest_period_start
from hormonaflow.models.base import MS_PER_DAY, now_ms
from hormonaflow.models.state import CycleInfo, CyclePhase

logger = logging.getLogger("hormonaflow.cycle.engine")


@dataclass(frozen=True)
class PhaseBand:
    """A fixed run of cycle days belonging to one phase.

    Attributes:
        phase:     Phase these days belong to.
        first_day: First cycle day of the band (1-indexed, inclusive).
        last_day:  Last cycle day of the band, or None for open-ended.
        total:     Nominal length of the phase reported to the UI.
    """

    phase: CyclePhase
    first_day: int
    last_day: int | None
    total: int

    def contains(self, cycle_day: int) -> bool:
        if cycle_day < self.first_day:
            return False
        return self.last_day is None or cycle_day <= self.last_day


PHASE_BANDS: tuple[PhaseBand, ...] = (
    PhaseBand(CyclePhase.menstrual, 1, 5, 5),
    PhaseBand(CyclePhase.follicular, 6, 13, 8),
    PhaseBand(CyclePhase.ovulatory, 14, 17, 4),
    PhaseBand(CyclePhase.luteal, 18, None, 11),
)

# Returned when no period start has ever been recorded.
NO_HISTORY_CYCLE_INFO = CycleInfo(
    day=1,
    phase=CyclePhase.follicular,
    progress=0.0,
    phase_day=1,
    phase_total=10,
)


def days_since(start_ms: int, now: int) -> int:
    """Whole days between two instants, rounded up and floored at 1.

    The distance is absolute, so a start slightly in the future counts the
    same as one slightly in the past.
    """
    return max(1, math.ceil(abs(now - start_ms) / MS_PER_DAY))


def wrap_cycle_day(elapsed_days: int, cycle_length: int) -> int:
    """Map an elapsed-day count onto a 1-indexed day within the cycle."""
    if cycle_length <= 0:
        raise ValueError(f"cycle_length must be positive, got {cycle_length}")
    return ((elapsed_days - 1) % cycle_length) + 1


def phase_for_day(cycle_day: int) -> tuple[CyclePhase, int, int]:
    """Look up the phase band for a cycle day.

    Returns:
        (phase, phase_day, phase_total) where phase_day is 1-indexed within
        the band.
    """
    for band in PHASE_BANDS:
        if band.contains(cycle_day):
            return band.phase, cycle_day - band.first_day + 1, band.total
    raise ValueError(f"cycle_day must be >= 1, got {cycle_day}")


def compute_cycle_info(
    period_history: Sequence[int],
    cycle_length: int,
    now: int | None = None,
) -> CycleInfo:
    """Derive the current cycle position.

    Args:
        period_history: Period-start timestamps in ms, most recent first.
        cycle_length:   Configured cycle length in days (must be positive).
        now:            Reference instant in ms (defaults to the wall clock).

    Returns:
        CycleInfo for ``now``.  An empty history yields the fixed
        NO_HISTORY_CYCLE_INFO default whatever the other arguments are.

    Raises:
        ValueError: If cycle_length is not positive.
    """
    last_start = latest_period_start(period_history)
    if last_start is None:
        return NO_HISTORY_CYCLE_INFO.model_copy()

    current = now_ms() if now is None else now

    elapsed = days_since(last_start, current)
    cycle_day = wrap_cycle_day(elapsed, cycle_length)
    phase, phase_day, phase_total = phase_for_day(cycle_day)

    logger.debug(
        "Cycle day %d of %d (%s, phase day %d/%d)",
        cycle_day, cycle_length, phase.value, phase_day, phase_total,
    )
    return CycleInfo(
        day=cycle_day,
        phase=phase,
        progress=cycle_day / cycle_length * 100,
        phase_day=phase_day,
        phase_total=phase_total,
    )


def classify_cycle_length(cycle_length: int) -> str:
    """Classify a cycle length as 'short', 'normal', or 'long'.

    Bounds come from the ``cycle`` section of tracking_config.yaml.
    """
    cfg = get_tracking_config().cycle
    if cycle_length < cfg.min_length:
        return "short"
    if cycle_length > cfg.max_length:
        return "long"
    return "normal"
