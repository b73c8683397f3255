from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class Task:
    """Domain entity: a dated unit of work assigned to one or more workers.

    `start_time`/`end_time` are "HH:MM" strings, both set or both None.
    """

    task_id: int
    project_id: int
    title: str
    due_date: date
    assigned_workers: tuple[int, ...] = ()
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    description: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    @property
    def assigned_to(self) -> Optional[int]:
        """Legacy single-assignee view: the first assigned worker."""
        return self.assigned_workers[0] if self.assigned_workers else None

    @property
    def has_time_window(self) -> bool:
        return bool(self.start_time and self.end_time)
