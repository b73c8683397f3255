"""Capacity model: pure functions over workers, attendance and time windows.

Nothing here performs I/O or raises on malformed input; bad values come back
as "no capacity" or "no interval".
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Union

from ..core.constants import DEFAULT_WORKING_HOURS_PER_DAY, MINUTES_PER_DAY, MINUTES_PER_HOUR
from ..core.enums import AttendanceStatus, WorkerStatus
from ..tasks.model import Task
from ..workers.model import Worker

_HHMM = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")

CAPACITY_GRANTING = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.HALF_DAY})


@dataclass(frozen=True)
class Interval:
    """Half-open [start_min, end_min) in minutes after midnight."""

    start_min: int
    end_min: int

    @property
    def duration_min(self) -> int:
        return self.end_min - self.start_min


# A task without a window is booked as the whole day.
FULL_DAY = Interval(0, MINUTES_PER_DAY)


@dataclass
class WorkerDayLoad:
    assigned_minutes: int = 0
    overlaps: bool = False


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def is_active_for_date(worker: Optional[Worker], target: Union[date, datetime]) -> bool:
    if worker is None:
        return False
    if worker.status == WorkerStatus.ACTIVE:
        return True
    if worker.status == WorkerStatus.INACTIVE:
        if worker.inactive_from is None:
            return False
        return _as_date(target) < _as_date(worker.inactive_from)
    return False


def full_day_minutes(worker: Worker) -> int:
    try:
        hours = float(worker.working_hours_per_day or DEFAULT_WORKING_HOURS_PER_DAY)
    except (TypeError, ValueError):
        hours = DEFAULT_WORKING_HOURS_PER_DAY
    if not math.isfinite(hours):
        hours = DEFAULT_WORKING_HOURS_PER_DAY
    return max(0, int(round(hours * MINUTES_PER_HOUR)))


def capacity_minutes(worker: Worker, attendance_status: Optional[AttendanceStatus]) -> int:
    if attendance_status == AttendanceStatus.PRESENT:
        return full_day_minutes(worker)
    if attendance_status == AttendanceStatus.HALF_DAY:
        return full_day_minutes(worker) // 2
    return 0


def parse_hhmm(value: Optional[str]) -> Optional[int]:
    m = _HHMM.fullmatch(str(value or ""))
    if not m:
        return None
    return int(m.group(1)) * MINUTES_PER_HOUR + int(m.group(2))


def parse_interval(start_time: Optional[str], end_time: Optional[str]) -> Optional[Interval]:
    start_min = parse_hhmm(start_time)
    end_min = parse_hhmm(end_time)
    if start_min is None or end_min is None:
        return None
    if end_min <= start_min:
        return None
    return Interval(start_min, end_min)


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and b_start < a_end


def task_interval(task: Task) -> Interval:
    return parse_interval(task.start_time, task.end_time) or FULL_DAY


def tally_worker_day(
    tasks: Iterable[Task],
    worker_ids: Iterable[int],
    requested: Optional[Interval] = None,
) -> dict[int, WorkerDayLoad]:
    """Sum booked minutes per worker and flag collisions with `requested`.

    `tasks` must already be limited to one date and exclude cancelled tasks.
    """
    loads = {int(w): WorkerDayLoad() for w in worker_ids}
    for task in tasks:
        booked = task_interval(task)
        for wid in task.assigned_workers:
            load = loads.get(int(wid))
            if load is None:
                continue
            load.assigned_minutes += booked.duration_min
            if requested and overlaps(requested.start_min, requested.end_min, booked.start_min, booked.end_min):
                load.overlaps = True
    return loads


def minutes_to_hours(minutes: int) -> float:
    return round(minutes / MINUTES_PER_HOUR, 1)
