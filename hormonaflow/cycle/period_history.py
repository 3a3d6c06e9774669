"""Period history: the descending list of recorded period-start timestamps.

The history is plain data (``list[int]`` of epoch milliseconds, most recent
first).  These helpers are the only code that changes it, and every one of
them returns a new list that is sorted descending.  Duplicate timestamps are
kept: two submissions for the same instant produce two entries.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from hormonaflow.models.base import MS_PER_DAY

logger = logging.getLogger("hormonaflow.cycle.period_history")


def sort_descending(timestamps: Iterable[int]) -> list[int]:
    """Return a new list of the timestamps, most recent first."""
    return sorted(timestamps, reverse=True)


def is_sorted_descending(history: Sequence[int]) -> bool:
    """Return True if every entry is >= the one after it."""
    return all(a >= b for a, b in zip(history, history[1:]))


def record_period_start(history: Sequence[int], timestamp: int) -> list[int]:
    """Prepend a new period start and re-sort.

    Args:
        history:   Current history (not modified).
        timestamp: Epoch milliseconds of the new period day one.

    Returns:
        A new descending history containing ``timestamp``.
    """
    return sort_descending([timestamp, *history])


def replace_history(period_starts: Iterable[int]) -> list[int]:
    """Build a history from an authoritative external list.

    Imported data overwrites local history entirely.  The list is kept exactly
    as supplied, in the source's order.
    """
    history = list(period_starts)
    if not is_sorted_descending(history):
        logger.warning(
            "Imported period history is not sorted descending; keeping source order (%d entries)",
            len(history),
        )
    return history


def latest_period_start(history: Sequence[int]) -> int | None:
    """Return the most recent period start, or None for an empty history."""
    return history[0] if history else None


def cycle_lengths_days(history: Sequence[int]) -> list[int]:
    """Whole-day gaps between consecutive period starts, newest gap first.

    A history of n starts yields n - 1 lengths.
    """
    return [round((a - b) / MS_PER_DAY) for a, b in zip(history, history[1:])]
