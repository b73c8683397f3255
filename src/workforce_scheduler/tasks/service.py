from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_positive_int, require_non_empty, require_positive_ids, require_text
from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..scheduling.boundary import ensure_within_project_end
from ..scheduling.capacity import parse_interval
from ..scheduling.locks import WorkerDayLocks, keys_for
from ..scheduling.team_sync import ProjectTeamSynchronizer, TeamSyncResult
from ..scheduling.validator import AssignmentValidator
from .model import Task, TaskQuery
from .repository import TaskRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "priority",
        "status",
        "due_date",
        "start_time",
        "end_time",
        "location",
        "notes",
        "assigned_to",
        "assigned_workers",
        "project_id",
    }
)


@dataclass(frozen=True)
class NewTask:
    project_id: int
    title: str
    due_date: date
    assigned_workers: Optional[Sequence[int]] = None
    assigned_to: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    priority: TaskPriority | str = TaskPriority.MEDIUM
    description: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class TaskWriteResult:
    task: Task
    workers_added_to_project: int
    project_team_size: Optional[int]
    message: str


@dataclass(frozen=True)
class TaskPage:
    tasks: list[Task]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


def build_query(
    *,
    project_id: Any = None,
    worker_id: Any = None,
    status: Any = None,
    priority: Any = None,
    due_date: Optional[date] = None,
    page: Any = None,
    limit: Any = None,
) -> TaskQuery:
    """Turn raw listing filters into a TaskQuery, rejecting anything unusable."""
    size = optional_positive_int(limit, "limit", default=DEFAULT_PAGE_SIZE)
    if size > MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be at most {MAX_PAGE_SIZE}")
    return TaskQuery(
        project_id=optional_positive_int(project_id, "projectId"),
        worker_id=optional_positive_int(worker_id, "assignedTo"),
        status=_coerce(TaskStatus, status, "status") if status else None,
        priority=_coerce(TaskPriority, priority, "priority") if priority else None,
        due_date=due_date,
        page=optional_positive_int(page, "page", default=1),
        limit=size,
    )


def _normalize_workers(assigned_workers: Optional[Sequence[Any]], assigned_to: Any) -> Optional[list[int]]:
    """Prefer the multi-worker list; fall back to the legacy single assignee."""
    if assigned_workers is not None:
        if isinstance(assigned_workers, (str, bytes)) or not isinstance(assigned_workers, Sequence):
            raise ValidationError("assignedWorkers must be a list of worker ids")
        return require_positive_ids(assigned_workers, "assignedWorkers")
    if assigned_to is not None and assigned_to != "":
        return require_positive_ids([assigned_to], "assignedTo")
    return None


def _normalize_window(start_time: Optional[str], end_time: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    start = (require_text(start_time, "startTime") or "").strip() or None
    end = (require_text(end_time, "endTime") or "").strip() or None
    if (start is None) != (end is None):
        raise ValidationError("Task start time and end time must be provided together")
    if start and parse_interval(start, end) is None:
        raise ValidationError("Task start time and end time are required and must be a valid range (HH:MM)")
    return start, end


def _coerce(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


class TaskService:
    """Task reads plus the write path: boundary check, assignment validation, roster sync, persist.

    Validation and the write happen under the worker-day locks of every
    (worker, date) the task will occupy.
    """

    def __init__(
        self,
        tasks: TaskRepository,
        projects: ProjectRepository,
        validator: AssignmentValidator,
        team_sync: ProjectTeamSynchronizer,
        locks: WorkerDayLocks,
    ):
        self._tasks = tasks
        self._projects = projects
        self._validator = validator
        self._team_sync = team_sync
        self._locks = locks

    def _get_project(self, project_id: Any) -> Project:
        try:
            pid = int(project_id)
        except (TypeError, ValueError):
            raise ValidationError("projectId is required")
        project = self._projects.get_by_id(pid) if pid > 0 else None
        if not project:
            raise NotFoundError("Project not found")
        return project

    def get_task(self, task_id: int) -> Task:
        task = self._tasks.get_by_id(int(task_id))
        if not task:
            raise NotFoundError("Task not found")
        return task

    def list_tasks(self, query: TaskQuery) -> TaskPage:
        tasks, total = self._tasks.find(query)
        return TaskPage(tasks=list(tasks), total=total, page=query.page, limit=query.limit)

    def create_task(self, new: NewTask) -> TaskWriteResult:
        title = require_non_empty(new.title, "Task title")
        priority = _coerce(TaskPriority, new.priority, "priority")
        project = self._get_project(new.project_id)
        workers = _normalize_workers(new.assigned_workers, new.assigned_to) or []
        start_time, end_time = _normalize_window(new.start_time, new.end_time)
        description = require_text(new.description, "description")
        location = require_text(new.location, "location")
        notes = require_text(new.notes, "notes")

        ensure_within_project_end(new.due_date, project.end_date)

        with self._locks.hold(keys_for(workers, new.due_date)):
            self._validator.validate(workers, new.due_date, start_time=start_time, end_time=end_time)
            synced = self._team_sync.sync(project, workers)
            task_id = self._tasks.create(
                Task(
                    task_id=0,
                    project_id=project.project_id,
                    title=title,
                    due_date=new.due_date,
                    assigned_workers=tuple(workers),
                    start_time=start_time,
                    end_time=end_time,
                    priority=priority,
                    description=description,
                    location=location,
                    notes=notes,
                )
            )

        logger.info("task %s created for project %s on %s workers=%s", task_id, project.project_id, new.due_date, workers)
        return TaskWriteResult(
            task=self.get_task(task_id),
            workers_added_to_project=len(synced.added),
            project_team_size=synced.team_size,
            message="Task created and workers added to project team" if synced.added else "Task created successfully",
        )

    def update_task(self, task_id: int, changes: Mapping[str, Any]) -> TaskWriteResult:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        task = self.get_task(task_id)

        workers = _normalize_workers(changes.get("assigned_workers"), changes.get("assigned_to"))
        workers_changed = workers is not None
        date_changed = "due_date" in changes and changes["due_date"] is not None
        project_changed = "project_id" in changes and changes["project_id"] is not None
        window_changed = "start_time" in changes or "end_time" in changes

        due_date = changes["due_date"] if date_changed else task.due_date
        start_time, end_time = _normalize_window(
            changes["start_time"] if "start_time" in changes else task.start_time,
            changes["end_time"] if "end_time" in changes else task.end_time,
        )
        if workers is None:
            workers = list(task.assigned_workers)

        project: Optional[Project] = None
        if date_changed or project_changed or workers_changed:
            project = self._get_project(changes["project_id"] if project_changed else task.project_id)
        if project is not None and (date_changed or project_changed):
            ensure_within_project_end(due_date, project.end_date)

        updated = replace(
            task,
            project_id=project.project_id if project is not None else task.project_id,
            due_date=due_date,
            start_time=start_time,
            end_time=end_time,
            assigned_workers=tuple(workers),
        )
        if "title" in changes:
            updated = replace(updated, title=require_non_empty(changes["title"], "Task title"))
        if changes.get("priority") is not None:
            updated = replace(updated, priority=_coerce(TaskPriority, changes["priority"], "priority"))
        if changes.get("status") is not None:
            updated = replace(updated, status=_coerce(TaskStatus, changes["status"], "status"))
        for field_name in ("description", "location", "notes"):
            if field_name in changes:
                updated = replace(updated, **{field_name: require_text(changes[field_name], field_name)})

        needs_validation = workers_changed or date_changed or window_changed
        needs_sync = project is not None and (workers_changed or project_changed)
        lock_keys = keys_for(workers, due_date) if needs_validation else []

        synced: Optional[TeamSyncResult] = None
        with self._locks.hold(lock_keys):
            if needs_validation:
                self._validator.validate(
                    workers,
                    due_date,
                    start_time=start_time,
                    end_time=end_time,
                    exclude_task_id=task.task_id,
                )
            if needs_sync:
                synced = self._team_sync.sync(project, workers)
            if not self._tasks.save(updated):
                raise NotFoundError("Task not found")

        added = len(synced.added) if synced else 0
        logger.info("task %s updated (fields=%s)", task.task_id, sorted(changes))
        return TaskWriteResult(
            task=self.get_task(task.task_id),
            workers_added_to_project=added,
            project_team_size=synced.team_size if synced else None,
            message="Task updated and workers added to project team" if added else "Task updated successfully",
        )

    def change_status(self, task_id: int, status: TaskStatus | str) -> Task:
        """Status transitions are not governed by the scheduling rules."""
        new_status = _coerce(TaskStatus, status, "status")
        if not self._tasks.update_status(int(task_id), new_status):
            raise NotFoundError("Task not found")
        return self.get_task(task_id)

    def delete_task(self, task_id: int) -> None:
        # The project roster is left as-is.
        if not self._tasks.delete(int(task_id)):
            raise NotFoundError("Task not found")
        logger.info("task %s deleted", task_id)
