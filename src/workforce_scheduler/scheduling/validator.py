from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import (
    AttendanceViolation,
    CapacityViolation,
    LifecycleViolation,
    NotFoundError,
    ValidationError,
)
from ..tasks.repository import TaskRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .capacity import CAPACITY_GRANTING, is_active_for_date, minutes_to_hours, parse_interval, tally_worker_day
from .rules import (
    HALF_DAY_EXHAUSTED,
    HALF_DAY_LIMITED,
    INSUFFICIENT_HOURS,
    TIME_OVERLAP,
    AvailabilityRule,
    WorkerDay,
    assess,
    first_violation,
)

logger = logging.getLogger(__name__)


def _names(days: Sequence[WorkerDay]) -> str:
    return ", ".join(d.worker.name for d in days)


def _half_day_exhausted(days: Sequence[WorkerDay]) -> str:
    if len(days) == 1:
        return "This worker has already completed their half-day work."
    return f"These workers have already completed their half-day work: {_names(days)}"


def _half_day_limited(days: Sequence[WorkerDay]) -> str:
    items = ", ".join(
        f"{d.worker.name} (remaining {max(0.0, minutes_to_hours(d.remaining_minutes))}h)" for d in days
    )
    return f"Half Day - Limited availability: {items}"


_MESSAGES: dict[str, Callable[[Sequence[WorkerDay]], str]] = {
    TIME_OVERLAP.code: lambda days: f"Cannot assign task: time overlaps with existing task(s) for ({_names(days)})",
    HALF_DAY_EXHAUSTED.code: _half_day_exhausted,
    HALF_DAY_LIMITED.code: _half_day_limited,
    INSUFFICIENT_HOURS.code: lambda days: f"Cannot assign task: insufficient available hours for ({_names(days)})",
}


class AssignmentValidator:
    """Write-path guard for a task's workers, date and time window.

    Pass A (always): workers exist, are active for the date and have
    present/half-day attendance. Pass B (only with a full time window):
    no overlaps and enough remaining capacity. The first failing category
    raises; nothing is accumulated across categories.
    """

    def __init__(self, workers: WorkerRepository, attendance: AttendanceRepository, tasks: TaskRepository):
        self._workers = workers
        self._attendance = attendance
        self._tasks = tasks

    def validate(
        self,
        worker_ids: Sequence[int],
        work_date: date,
        *,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        exclude_task_id: Optional[int] = None,
    ) -> None:
        unique_ids = list(dict.fromkeys(int(w) for w in worker_ids))
        if not unique_ids:
            raise ValidationError("At least one worker must be assigned")

        workers, status_by_worker = self._check_eligible_for_date(unique_ids, work_date)

        if start_time and end_time:
            self._check_capacity(workers, status_by_worker, work_date, start_time, end_time, exclude_task_id)

        logger.debug("assignment ok: workers=%s date=%s window=%s-%s", unique_ids, work_date, start_time, end_time)

    def _check_eligible_for_date(
        self, worker_ids: list[int], work_date: date
    ) -> tuple[list[Worker], dict[int, AttendanceStatus]]:
        found = {w.worker_id: w for w in self._workers.get_many(worker_ids) if w.role == Role.WORKER}
        if len(found) != len(worker_ids):
            raise NotFoundError("One or more assigned workers were not found")
        workers = [found[wid] for wid in worker_ids]

        inactive = [w.name for w in workers if not is_active_for_date(w, work_date)]
        if inactive:
            raise LifecycleViolation(
                f"Cannot assign task: worker inactive for selected date ({', '.join(inactive)})"
            )

        records = self._attendance.list_for_date(work_date, worker_ids=worker_ids)
        status_by_worker = {r.worker_id: r.status for r in records}
        missing: list[str] = []
        not_available: list[str] = []
        for w in workers:
            status = status_by_worker.get(w.worker_id)
            if status is None:
                missing.append(w.name)
            elif status not in CAPACITY_GRANTING:
                not_available.append(w.name)

        if missing or not_available:
            parts = []
            if missing:
                parts.append(f"no attendance marked ({', '.join(missing)})")
            if not_available:
                parts.append(f"attendance not available ({', '.join(not_available)})")
            raise AttendanceViolation(f"Cannot assign task: {'; '.join(parts)} for selected date")

        return workers, status_by_worker

    def _check_capacity(
        self,
        workers: list[Worker],
        status_by_worker: dict[int, AttendanceStatus],
        work_date: date,
        start_time: str,
        end_time: str,
        exclude_task_id: Optional[int],
    ) -> None:
        requested = parse_interval(start_time, end_time)
        if requested is None:
            raise ValidationError("Task start time and end time are required and must be a valid range (HH:MM)")

        worker_ids = [w.worker_id for w in workers]
        existing = self._tasks.list_for_workers_on_date(worker_ids, work_date, exclude_task_id=exclude_task_id)
        loads = tally_worker_day(existing, worker_ids, requested)

        blocked: dict[AvailabilityRule, list[WorkerDay]] = {}
        for w in workers:
            day = assess(w, status_by_worker[w.worker_id], loads.get(w.worker_id), requested)
            rule = first_violation(day)
            if rule is not None:
                blocked.setdefault(rule, []).append(day)

        if not blocked:
            return

        rule = min(blocked, key=lambda r: r.precedence)
        message = _MESSAGES[rule.code](blocked[rule])
        logger.info("assignment rejected (%s) on %s: %s", rule.code, work_date, message)
        raise CapacityViolation(message)
