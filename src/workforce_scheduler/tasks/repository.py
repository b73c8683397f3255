from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskStatus
from .model import Task, TaskQuery


class TaskRepository(Protocol):
    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def list_for_workers_on_date(
        self,
        worker_ids: Sequence[int],
        work_date: date,
        *,
        exclude_task_id: Optional[int] = None,
    ) -> Sequence[Task]:
        """Non-cancelled tasks on `work_date` assigned to any of `worker_ids`.

        `exclude_task_id` drops the task being edited so it never collides with itself.
        """

        raise NotImplementedError

    def find(self, query: TaskQuery) -> tuple[Sequence[Task], int]:
        """One page of tasks matching `query`, ordered by due date then id, plus the total match count.

        `worker_id` matches any position in the worker list, so the legacy
        single assignee is covered too.
        """

        raise NotImplementedError

    def create(self, task: Task) -> int:
        """Insert `task` (its task_id is ignored). Returns the new task_id."""

        raise NotImplementedError

    def save(self, task: Task) -> bool:
        """Overwrite every field and the worker list of an existing task."""

        raise NotImplementedError

    def update_status(self, task_id: int, status: TaskStatus) -> bool:
        raise NotImplementedError

    def delete(self, task_id: int) -> bool:
        raise NotImplementedError
