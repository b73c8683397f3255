from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_WORKING_HOURS_PER_DAY
from ..core.enums import Role, WorkerStatus


@dataclass(frozen=True)
class Worker:
    """Domain entity: a schedulable person.

    `inactive_from` is the first calendar date the worker is NOT active.
    """

    worker_id: int
    name: str
    role: Role = Role.WORKER
    status: WorkerStatus = WorkerStatus.ACTIVE
    inactive_from: Optional[date] = None
    working_hours_per_day: float = DEFAULT_WORKING_HOURS_PER_DAY
    position: Optional[str] = None
