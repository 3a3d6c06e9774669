"""Tests for cycle phase inference."""

from __future__ import annotations

import pytest

from hormonaflow.cycle.engine import (
    NO_HISTORY_CYCLE_INFO,
    PHASE_BANDS,
    classify_cycle_length,
    compute_cycle_info,
    days_since,
    phase_for_day,
    wrap_cycle_day,
)
from hormonaflow.cycle.tests.conftest import DAY, TEST_NOW
from hormonaflow.models.state import CyclePhase

# A period logged N days ago is read a moment later, not at the same millisecond.
READ_LAG_MS = 1_000


def started_days_ago(days: int) -> list[int]:
    return [TEST_NOW - days * DAY - READ_LAG_MS]


def expected_phase(cycle_day: int) -> CyclePhase:
    if cycle_day <= 5:
        return CyclePhase.menstrual
    if cycle_day <= 13:
        return CyclePhase.follicular
    if cycle_day <= 17:
        return CyclePhase.ovulatory
    return CyclePhase.luteal


# ---------------------------------------------------------------------------
# Empty history
# ---------------------------------------------------------------------------


class TestNoHistory:
    def test_default_cycle_info(self) -> None:
        info = compute_cycle_info([], 28, now=TEST_NOW)
        assert info.day == 1
        assert info.phase == CyclePhase.follicular
        assert info.progress == 0
        assert info.phase_day == 1
        assert info.phase_total == 10

    @pytest.mark.parametrize("cycle_length", [1, 21, 28, 35, 90])
    @pytest.mark.parametrize("now", [0, TEST_NOW, TEST_NOW + 400 * DAY])
    def test_default_ignores_cycle_length_and_now(self, cycle_length: int, now: int) -> None:
        assert compute_cycle_info([], cycle_length, now=now) == NO_HISTORY_CYCLE_INFO

    def test_default_is_a_copy(self) -> None:
        info = compute_cycle_info([], 28, now=TEST_NOW)
        assert info is not NO_HISTORY_CYCLE_INFO


# ---------------------------------------------------------------------------
# Reference scenarios (28-day cycle)
# ---------------------------------------------------------------------------


class TestReferenceScenarios:
    def test_period_started_now_is_day_one(self) -> None:
        info = compute_cycle_info([TEST_NOW], 28, now=TEST_NOW)
        assert info.day == 1
        assert info.phase == CyclePhase.menstrual
        assert info.phase_day == 1
        assert info.phase_total == 5
        assert info.progress == pytest.approx(3.5714, abs=1e-3)

    def test_six_days_ago_is_follicular_day_two(self) -> None:
        info = compute_cycle_info(started_days_ago(6), 28, now=TEST_NOW)
        assert info.day == 7
        assert info.phase == CyclePhase.follicular
        assert info.phase_day == 2
        assert info.phase_total == 8

    def test_fifteen_days_ago_is_ovulatory_day_three(self) -> None:
        info = compute_cycle_info(started_days_ago(15), 28, now=TEST_NOW)
        assert info.day == 16
        assert info.phase == CyclePhase.ovulatory
        assert info.phase_day == 3
        assert info.phase_total == 4

    def test_exact_whole_days_do_not_round_up(self) -> None:
        """Exactly six days elapsed counts as six, not seven."""
        info = compute_cycle_info([TEST_NOW - 6 * DAY], 28, now=TEST_NOW)
        assert info.day == 6
        assert info.phase == CyclePhase.follicular
        assert info.phase_day == 1

    def test_luteal_band(self) -> None:
        info = compute_cycle_info(started_days_ago(20), 28, now=TEST_NOW)
        assert info.day == 21
        assert info.phase == CyclePhase.luteal
        assert info.phase_day == 4
        assert info.phase_total == 11

    def test_last_day_of_cycle_is_full_progress(self) -> None:
        info = compute_cycle_info(started_days_ago(27), 28, now=TEST_NOW)
        assert info.day == 28
        assert info.progress == pytest.approx(100.0)

    def test_wraps_into_next_cycle(self) -> None:
        info = compute_cycle_info(started_days_ago(28), 28, now=TEST_NOW)
        assert info.day == 1
        assert info.phase == CyclePhase.menstrual

    def test_only_most_recent_start_matters(self) -> None:
        history = [TEST_NOW - 3 * DAY - READ_LAG_MS, TEST_NOW - 40 * DAY, TEST_NOW - 70 * DAY]
        info = compute_cycle_info(history, 28, now=TEST_NOW)
        assert info.day == 4

    def test_start_in_the_future_counts_by_distance(self) -> None:
        info = compute_cycle_info([TEST_NOW + 2 * DAY + READ_LAG_MS], 28, now=TEST_NOW)
        assert info.day == 3


# ---------------------------------------------------------------------------
# Properties across cycle lengths
# ---------------------------------------------------------------------------


class TestCycleDayProperties:
    @pytest.mark.parametrize("cycle_length", [1, 10, 16, 21, 28, 29, 35, 45])
    def test_cycle_day_in_range_and_phase_matches_table(self, cycle_length: int) -> None:
        for days_ago in range(0, 120):
            info = compute_cycle_info(started_days_ago(days_ago), cycle_length, now=TEST_NOW)
            assert 1 <= info.day <= cycle_length
            assert info.phase == expected_phase(info.day)
            assert 0 < info.progress <= 100

    def test_repeated_reads_are_identical(self) -> None:
        history = started_days_ago(11)
        first = compute_cycle_info(history, 28, now=TEST_NOW)
        second = compute_cycle_info(history, 28, now=TEST_NOW)
        assert first == second

    def test_does_not_modify_history(self) -> None:
        history = [TEST_NOW - DAY, TEST_NOW - 30 * DAY]
        snapshot = list(history)
        compute_cycle_info(history, 28, now=TEST_NOW)
        assert history == snapshot

    def test_defaults_now_to_wall_clock(self) -> None:
        info = compute_cycle_info([TEST_NOW], 28)
        assert 1 <= info.day <= 28

    @pytest.mark.parametrize("cycle_length", [0, -5])
    def test_non_positive_cycle_length_rejected(self, cycle_length: int) -> None:
        with pytest.raises(ValueError):
            compute_cycle_info([TEST_NOW], cycle_length, now=TEST_NOW)


# ---------------------------------------------------------------------------
# Fixed bands with non-28-day cycles
# ---------------------------------------------------------------------------


class TestFixedBandsOtherLengths:
    def test_long_cycle_luteal_runs_past_nominal_total(self) -> None:
        """Bands are not rescaled: day 35 of a 35-day cycle is luteal day 18 of 11."""
        info = compute_cycle_info(started_days_ago(34), 35, now=TEST_NOW)
        assert info.day == 35
        assert info.phase == CyclePhase.luteal
        assert info.phase_day == 18
        assert info.phase_total == 11
        assert info.phase_day > info.phase_total

    def test_long_cycle_ovulatory_window_unchanged(self) -> None:
        info = compute_cycle_info(started_days_ago(13), 35, now=TEST_NOW)
        assert info.day == 14
        assert info.phase == CyclePhase.ovulatory
        assert info.phase_day == 1

    def test_short_cycle_never_reaches_luteal(self) -> None:
        phases = {
            compute_cycle_info(started_days_ago(d), 16, now=TEST_NOW).phase
            for d in range(0, 64)
        }
        assert CyclePhase.luteal not in phases
        assert CyclePhase.ovulatory in phases

    def test_very_short_cycle_stays_in_first_two_bands(self) -> None:
        phases = {
            compute_cycle_info(started_days_ago(d), 10, now=TEST_NOW).phase
            for d in range(0, 40)
        }
        assert phases == {CyclePhase.menstrual, CyclePhase.follicular}

    def test_short_cycle_progress_never_exceeds_100(self) -> None:
        for d in range(0, 40):
            info = compute_cycle_info(started_days_ago(d), 12, now=TEST_NOW)
            assert info.progress <= 100


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestPhaseBands:
    def test_band_table(self) -> None:
        assert [(b.phase, b.first_day, b.last_day, b.total) for b in PHASE_BANDS] == [
            (CyclePhase.menstrual, 1, 5, 5),
            (CyclePhase.follicular, 6, 13, 8),
            (CyclePhase.ovulatory, 14, 17, 4),
            (CyclePhase.luteal, 18, None, 11),
        ]

    def test_nominal_totals_sum_to_28(self) -> None:
        assert sum(b.total for b in PHASE_BANDS) == 28

    @pytest.mark.parametrize(
        ("cycle_day", "expected"),
        [
            (1, (CyclePhase.menstrual, 1, 5)),
            (5, (CyclePhase.menstrual, 5, 5)),
            (6, (CyclePhase.follicular, 1, 8)),
            (13, (CyclePhase.follicular, 8, 8)),
            (14, (CyclePhase.ovulatory, 1, 4)),
            (17, (CyclePhase.ovulatory, 4, 4)),
            (18, (CyclePhase.luteal, 1, 11)),
            (28, (CyclePhase.luteal, 11, 11)),
            (40, (CyclePhase.luteal, 23, 11)),
        ],
    )
    def test_phase_for_day_boundaries(self, cycle_day: int, expected: tuple) -> None:
        assert phase_for_day(cycle_day) == expected

    def test_phase_for_day_zero_rejected(self) -> None:
        with pytest.raises(ValueError):
            phase_for_day(0)

    def test_days_since_floors_at_one(self) -> None:
        assert days_since(TEST_NOW, TEST_NOW) == 1
        assert days_since(TEST_NOW - 1, TEST_NOW) == 1
        assert days_since(TEST_NOW - DAY - 1, TEST_NOW) == 2

    def test_wrap_cycle_day(self) -> None:
        assert wrap_cycle_day(1, 28) == 1
        assert wrap_cycle_day(28, 28) == 28
        assert wrap_cycle_day(29, 28) == 1
        assert wrap_cycle_day(57, 28) == 1


class TestClassifyCycleLength:
    def test_bounds_from_config(self) -> None:
        assert classify_cycle_length(20) == "short"
        assert classify_cycle_length(21) == "normal"
        assert classify_cycle_length(45) == "normal"
        assert classify_cycle_length(46) == "long"
