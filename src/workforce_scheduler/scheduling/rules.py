"""Availability rules in precedence order.

`RULES` is the single place the ordering lives: the first rule that applies
to a worker is that worker's verdict, and when several workers are blocked
the validator reports the group whose rule comes first.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..core.enums import AttendanceStatus
from ..workers.model import Worker
from .capacity import Interval, WorkerDayLoad, capacity_minutes


@dataclass(frozen=True)
class WorkerDay:
    """Everything the rules need to judge one worker on one date."""

    worker: Worker
    attendance_status: AttendanceStatus
    capacity_minutes: int
    assigned_minutes: int
    overlaps: bool
    requested: Optional[Interval] = None

    @property
    def remaining_minutes(self) -> int:
        return self.capacity_minutes - self.assigned_minutes

    @property
    def is_half_day(self) -> bool:
        return self.attendance_status == AttendanceStatus.HALF_DAY

    @property
    def exceeds_remaining(self) -> bool:
        return self.requested is not None and self.requested.duration_min > self.remaining_minutes


@dataclass(frozen=True)
class AvailabilityRule:
    code: str
    blocked_reason: str
    applies: Callable[[WorkerDay], bool]

    @property
    def precedence(self) -> int:
        return RULES.index(self)


TIME_OVERLAP = AvailabilityRule(
    code="time-overlap",
    blocked_reason="Time overlap with existing task",
    applies=lambda d: d.requested is not None and d.overlaps,
)
HALF_DAY_EXHAUSTED = AvailabilityRule(
    code="half-day-exhausted",
    blocked_reason="This worker has already completed their half-day work.",
    applies=lambda d: d.is_half_day and d.remaining_minutes <= 0,
)
HALF_DAY_LIMITED = AvailabilityRule(
    code="half-day-limited",
    blocked_reason="Insufficient remaining availability",
    applies=lambda d: d.is_half_day and d.exceeds_remaining,
)
INSUFFICIENT_HOURS = AvailabilityRule(
    code="insufficient-hours",
    blocked_reason="Insufficient remaining availability",
    applies=lambda d: d.exceeds_remaining,
)

RULES: tuple[AvailabilityRule, ...] = (
    TIME_OVERLAP,
    HALF_DAY_EXHAUSTED,
    HALF_DAY_LIMITED,
    INSUFFICIENT_HOURS,
)


def assess(
    worker: Worker,
    attendance_status: AttendanceStatus,
    load: Optional[WorkerDayLoad],
    requested: Optional[Interval] = None,
) -> WorkerDay:
    load = load or WorkerDayLoad()
    return WorkerDay(
        worker=worker,
        attendance_status=attendance_status,
        capacity_minutes=capacity_minutes(worker, attendance_status),
        assigned_minutes=load.assigned_minutes,
        overlaps=load.overlaps,
        requested=requested,
    )


def first_violation(day: WorkerDay) -> Optional[AvailabilityRule]:
    for rule in RULES:
        if rule.applies(day):
            return rule
    return None
