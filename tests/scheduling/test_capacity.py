from __future__ import annotations

from datetime import date, datetime

import pytest

from workforce_scheduler.core.enums import AttendanceStatus, TaskStatus, WorkerStatus
from workforce_scheduler.scheduling.capacity import (
    FULL_DAY,
    Interval,
    capacity_minutes,
    is_active_for_date,
    minutes_to_hours,
    overlaps,
    parse_hhmm,
    parse_interval,
    tally_worker_day,
)
from workforce_scheduler.tasks.model import Task
from workforce_scheduler.workers.model import Worker

CUTOFF = date(2099, 6, 1)


def _worker(status=WorkerStatus.ACTIVE, inactive_from=None, hours=8) -> Worker:
    return Worker(worker_id=1, name="W", status=status, inactive_from=inactive_from, working_hours_per_day=hours)


def _task(task_id, workers, start=None, end=None) -> Task:
    return Task(
        task_id=task_id,
        project_id=1,
        title=f"t{task_id}",
        due_date=CUTOFF,
        assigned_workers=tuple(workers),
        start_time=start,
        end_time=end,
        status=TaskStatus.PENDING,
    )


def test_active_worker_is_active_on_any_date():
    assert is_active_for_date(_worker(), date(1999, 1, 1))
    assert is_active_for_date(_worker(), date(2199, 1, 1))


def test_inactive_worker_is_active_only_before_cutoff():
    w = _worker(WorkerStatus.INACTIVE, inactive_from=CUTOFF)
    assert is_active_for_date(w, date(2099, 5, 31))
    assert not is_active_for_date(w, CUTOFF)
    assert not is_active_for_date(w, date(2099, 6, 2))


def test_inactive_without_cutoff_is_never_active():
    assert not is_active_for_date(_worker(WorkerStatus.INACTIVE), date(2000, 1, 1))


@pytest.mark.parametrize("status", [WorkerStatus.SUSPENDED, WorkerStatus.ON_LEAVE])
def test_other_statuses_are_never_active(status):
    assert not is_active_for_date(_worker(status, inactive_from=CUTOFF), date(2099, 5, 1))


def test_time_of_day_is_ignored_for_activity():
    w = _worker(WorkerStatus.INACTIVE, inactive_from=CUTOFF)
    assert not is_active_for_date(w, datetime(2099, 6, 1, 0, 0, 1))
    assert is_active_for_date(w, datetime(2099, 5, 31, 23, 59))


def test_missing_worker_is_not_active():
    assert not is_active_for_date(None, CUTOFF)


@pytest.mark.parametrize("hours", [8, 7.5, 8.25, 1, 24])
def test_half_day_is_floor_half_of_present(hours):
    w = _worker(hours=hours)
    present = capacity_minutes(w, AttendanceStatus.PRESENT)
    assert present == round(hours * 60)
    assert capacity_minutes(w, AttendanceStatus.HALF_DAY) == present // 2


@pytest.mark.parametrize("status", [AttendanceStatus.ABSENT, AttendanceStatus.ON_LEAVE, None])
def test_no_capacity_without_usable_attendance(status):
    assert capacity_minutes(_worker(), status) == 0


def test_zero_working_hours_falls_back_to_default():
    assert capacity_minutes(_worker(hours=0), AttendanceStatus.PRESENT) == 480


@pytest.mark.parametrize(
    "value,expected",
    [
        ("00:00", 0),
        ("08:30", 510),
        ("23:59", 1439),
        ("24:00", None),
        ("8:30", None),
        ("12:60", None),
        ("09:00\n", None),
        (" 09:00", None),
        ("09:00:00", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_hhmm(value, expected):
    assert parse_hhmm(value) == expected


def test_parse_interval_requires_end_after_start():
    assert parse_interval("09:00", "10:30") == Interval(540, 630)
    assert parse_interval("09:00", "10:30").duration_min == 90
    assert parse_interval("10:00", "10:00") is None
    assert parse_interval("11:00", "10:00") is None
    assert parse_interval("09:00", None) is None
    assert parse_interval("nine", "10:00") is None


def test_adjacent_intervals_do_not_overlap():
    nine, ten, eleven = 540, 600, 660
    assert not overlaps(nine, ten, ten, eleven)
    assert not overlaps(ten, eleven, nine, ten)


def test_overlap_is_symmetric():
    pairs = [((540, 600), (570, 630)), ((0, 1440), (600, 660)), ((540, 600), (600, 660)), ((100, 200), (300, 400))]
    for a, b in pairs:
        assert overlaps(*a, *b) == overlaps(*b, *a)
    assert overlaps(540, 600, 570, 630)


def test_tally_counts_window_less_task_as_whole_day():
    tasks = [_task(1, [1], "08:00", "10:00"), _task(2, [2])]
    loads = tally_worker_day(tasks, [1, 2], Interval(600, 660))

    assert loads[1].assigned_minutes == 120
    assert not loads[1].overlaps
    assert loads[2].assigned_minutes == FULL_DAY.duration_min
    assert loads[2].overlaps


def test_tally_ignores_workers_not_requested():
    loads = tally_worker_day([_task(1, [1, 9], "08:00", "09:00")], [1])
    assert set(loads) == {1}
    assert loads[1].assigned_minutes == 60
    assert not loads[1].overlaps


def test_minutes_to_hours_rounds_to_one_decimal():
    assert minutes_to_hours(240) == 4.0
    assert minutes_to_hours(100) == 1.7


@pytest.mark.parametrize("hours", [float("inf"), float("-inf"), float("nan"), "eight"])
def test_unusable_working_hours_fall_back_to_default(hours):
    assert capacity_minutes(_worker(hours=hours), AttendanceStatus.PRESENT) == 480
    assert capacity_minutes(_worker(hours=hours), AttendanceStatus.HALF_DAY) == 240
