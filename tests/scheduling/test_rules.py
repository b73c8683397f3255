from __future__ import annotations

from workforce_scheduler.core.enums import AttendanceStatus
from workforce_scheduler.scheduling.capacity import Interval, WorkerDayLoad
from workforce_scheduler.scheduling.rules import (
    HALF_DAY_EXHAUSTED,
    HALF_DAY_LIMITED,
    INSUFFICIENT_HOURS,
    RULES,
    TIME_OVERLAP,
    assess,
    first_violation,
)
from workforce_scheduler.workers.model import Worker

W = Worker(worker_id=1, name="W", working_hours_per_day=8)
TWO_HOURS = Interval(600, 720)


def test_precedence_is_declared_in_rule_order():
    assert [r.precedence for r in RULES] == [0, 1, 2, 3]
    assert TIME_OVERLAP.precedence < HALF_DAY_EXHAUSTED.precedence < HALF_DAY_LIMITED.precedence
    assert HALF_DAY_LIMITED.precedence < INSUFFICIENT_HOURS.precedence


def test_overlap_wins_even_when_capacity_is_also_exhausted():
    day = assess(W, AttendanceStatus.HALF_DAY, WorkerDayLoad(assigned_minutes=240, overlaps=True), TWO_HOURS)
    assert first_violation(day) is TIME_OVERLAP


def test_half_day_exhaustion_beats_insufficient_hours():
    day = assess(W, AttendanceStatus.HALF_DAY, WorkerDayLoad(assigned_minutes=240), TWO_HOURS)
    assert day.remaining_minutes == 0
    assert first_violation(day) is HALF_DAY_EXHAUSTED


def test_half_day_partial_is_reported_separately_from_full_day():
    half = assess(W, AttendanceStatus.HALF_DAY, WorkerDayLoad(assigned_minutes=180), TWO_HOURS)
    full = assess(W, AttendanceStatus.PRESENT, WorkerDayLoad(assigned_minutes=420), TWO_HOURS)
    assert first_violation(half) is HALF_DAY_LIMITED
    assert first_violation(full) is INSUFFICIENT_HOURS


def test_without_window_only_half_day_exhaustion_applies():
    overloaded_full_day = assess(W, AttendanceStatus.PRESENT, WorkerDayLoad(assigned_minutes=2000, overlaps=True))
    exhausted_half_day = assess(W, AttendanceStatus.HALF_DAY, WorkerDayLoad(assigned_minutes=240))

    assert first_violation(overloaded_full_day) is None
    assert first_violation(exhausted_half_day) is HALF_DAY_EXHAUSTED


def test_exact_fit_is_allowed():
    day = assess(W, AttendanceStatus.HALF_DAY, WorkerDayLoad(assigned_minutes=120), TWO_HOURS)
    assert day.remaining_minutes == 120
    assert first_violation(day) is None
