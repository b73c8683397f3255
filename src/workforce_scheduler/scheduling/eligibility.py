from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus, Role
from ..tasks.repository import TaskRepository
from ..workers.repository import WorkerRepository
from .capacity import CAPACITY_GRANTING, is_active_for_date, minutes_to_hours, parse_interval, tally_worker_day
from .rules import assess, first_violation

logger = logging.getLogger(__name__)

PRESENT_LABEL = "Present"
HALF_DAY_LABEL = "Half Day - Limited availability"


@dataclass(frozen=True)
class EligibleWorker:
    worker_id: int
    name: str
    position: str
    attendance_status: AttendanceStatus
    availability_label: str
    capacity_hours: float
    assigned_hours: float
    remaining_hours: float
    can_assign: bool
    blocked_reason: str = ""


@dataclass(frozen=True)
class EligibilityReport:
    work_date: date
    workers: list[EligibleWorker]

    @property
    def count(self) -> int:
        return len(self.workers)

    @property
    def message(self) -> str:
        return "Eligible workers loaded" if self.workers else "No eligible workers for selected date"


class EligibilityService:
    """Read-only picker data: who could be assigned on a date (and window).

    Results are an advisory snapshot; business-rule failures come back as
    `can_assign=False`, never as exceptions.
    """

    def __init__(self, workers: WorkerRepository, attendance: AttendanceRepository, tasks: TaskRepository):
        self._workers = workers
        self._attendance = attendance
        self._tasks = tasks

    def list_eligible(
        self,
        work_date: date,
        *,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> EligibilityReport:
        # A malformed window is treated as no window.
        requested = parse_interval(start_time, end_time) if (start_time and end_time) else None

        records = self._attendance.list_for_date(work_date, statuses=CAPACITY_GRANTING)
        status_by_worker = {r.worker_id: r.status for r in records}
        workers = [
            w
            for w in self._workers.get_many(list(status_by_worker))
            if w.role == Role.WORKER and is_active_for_date(w, work_date)
        ]
        workers.sort(key=lambda w: w.worker_id)

        worker_ids = [w.worker_id for w in workers]
        existing = self._tasks.list_for_workers_on_date(worker_ids, work_date) if worker_ids else []
        loads = tally_worker_day(existing, worker_ids, requested)

        out: list[EligibleWorker] = []
        for w in workers:
            day = assess(w, status_by_worker[w.worker_id], loads.get(w.worker_id), requested)
            rule = first_violation(day)
            out.append(
                EligibleWorker(
                    worker_id=w.worker_id,
                    name=w.name,
                    position=w.position or "",
                    attendance_status=day.attendance_status,
                    availability_label=HALF_DAY_LABEL if day.is_half_day else PRESENT_LABEL,
                    capacity_hours=minutes_to_hours(day.capacity_minutes),
                    assigned_hours=minutes_to_hours(day.assigned_minutes),
                    remaining_hours=max(0.0, minutes_to_hours(day.remaining_minutes)),
                    can_assign=rule is None,
                    blocked_reason=rule.blocked_reason if rule else "",
                )
            )

        logger.debug(
            "eligibility %s window=%s-%s: %d candidates, %d assignable",
            work_date, start_time, end_time, len(out), sum(1 for e in out if e.can_assign),
        )
        return EligibilityReport(work_date=work_date, workers=out)
