from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Collection, Optional, Sequence

import pytest

from workforce_scheduler import create_app
from workforce_scheduler.attendance.model import AttendanceRecord
from workforce_scheduler.container import Container
from workforce_scheduler.core.enums import AttendanceStatus, Role, TaskStatus, WorkerStatus
from workforce_scheduler.projects.model import Project
from workforce_scheduler.projects.service import ProjectService
from workforce_scheduler.scheduling.eligibility import EligibilityService
from workforce_scheduler.scheduling.locks import WorkerDayLocks
from workforce_scheduler.scheduling.team_sync import ProjectTeamSynchronizer
from workforce_scheduler.scheduling.validator import AssignmentValidator
from workforce_scheduler.tasks.model import Task, TaskQuery
from workforce_scheduler.tasks.service import NewTask, TaskService, TaskWriteResult
from workforce_scheduler.workers.model import Worker
from workforce_scheduler.workers.service import WorkerService

TASK_DATE = date(2099, 6, 1)


class InMemoryWorkers:
    def __init__(self):
        self._by_id: dict[int, Worker] = {}

    def add(self, worker: Worker) -> Worker:
        self._by_id[worker.worker_id] = worker
        return worker

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self._by_id.get(int(worker_id))

    def get_many(self, worker_ids: Sequence[int]) -> Sequence[Worker]:
        return [self._by_id[int(w)] for w in worker_ids if int(w) in self._by_id]

    def set_status(self, worker_id: int, *, status: WorkerStatus, inactive_from: Optional[date]) -> bool:
        w = self._by_id.get(int(worker_id))
        if not w:
            return False
        self._by_id[w.worker_id] = replace(w, status=status, inactive_from=inactive_from)
        return True


class InMemoryAttendance:
    def __init__(self):
        self._by_worker_date: dict[tuple[int, date], AttendanceRecord] = {}

    def get_for_worker_and_date(self, worker_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_worker_date.get((int(worker_id), work_date))

    def list_for_date(
        self,
        work_date: date,
        *,
        worker_ids: Optional[Sequence[int]] = None,
        statuses: Optional[Collection[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        out = [r for r in self._by_worker_date.values() if r.work_date == work_date]
        if worker_ids is not None:
            out = [r for r in out if r.worker_id in set(worker_ids)]
        if statuses is not None:
            out = [r for r in out if r.status in set(statuses)]
        return out

    def upsert(self, *, worker_id: int, work_date: date, status: AttendanceStatus) -> None:
        self._by_worker_date[(int(worker_id), work_date)] = AttendanceRecord(int(worker_id), work_date, status)


class InMemoryTasks:
    def __init__(self):
        self._by_id: dict[int, Task] = {}
        self._next_id = 1

    def get_by_id(self, task_id: int) -> Optional[Task]:
        return self._by_id.get(int(task_id))

    def list_for_workers_on_date(self, worker_ids, work_date, *, exclude_task_id=None):
        wanted = set(worker_ids)
        return [
            t
            for t in self._by_id.values()
            if t.due_date == work_date
            and t.status != TaskStatus.CANCELLED
            and t.task_id != exclude_task_id
            and wanted.intersection(t.assigned_workers)
        ]

    def find(self, query: TaskQuery) -> tuple[list[Task], int]:
        matched = [
            t
            for t in self._by_id.values()
            if (query.project_id is None or t.project_id == query.project_id)
            and (query.worker_id is None or query.worker_id in t.assigned_workers)
            and (query.status is None or t.status == query.status)
            and (query.priority is None or t.priority == query.priority)
            and (query.due_date is None or t.due_date == query.due_date)
        ]
        matched.sort(key=lambda t: (t.due_date, t.task_id))
        return matched[query.offset : query.offset + query.limit], len(matched)

    def create(self, task: Task) -> int:
        task_id = self._next_id
        self._next_id += 1
        self._by_id[task_id] = replace(task, task_id=task_id)
        return task_id

    def save(self, task: Task) -> bool:
        if task.task_id not in self._by_id:
            return False
        self._by_id[task.task_id] = task
        return True

    def update_status(self, task_id: int, status: TaskStatus) -> bool:
        t = self._by_id.get(int(task_id))
        if not t:
            return False
        self._by_id[t.task_id] = replace(t, status=status)
        return True

    def delete(self, task_id: int) -> bool:
        return self._by_id.pop(int(task_id), None) is not None

    def all(self) -> list[Task]:
        return list(self._by_id.values())


class InMemoryProjects:
    def __init__(self):
        self._by_id: dict[int, Project] = {}

    def add(self, project: Project) -> Project:
        self._by_id[project.project_id] = project
        return project

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self._by_id.get(int(project_id))

    def add_workers(self, project_id: int, worker_ids: Sequence[int]) -> int:
        p = self._by_id[int(project_id)]
        roster = p.assigned_workers | frozenset(int(w) for w in worker_ids)
        self._by_id[p.project_id] = replace(p, assigned_workers=roster)
        return len(roster)


@dataclass
class World:
    """A fully wired scheduler over in-memory repositories."""

    workers: InMemoryWorkers = field(default_factory=InMemoryWorkers)
    attendance: InMemoryAttendance = field(default_factory=InMemoryAttendance)
    tasks: InMemoryTasks = field(default_factory=InMemoryTasks)
    projects: InMemoryProjects = field(default_factory=InMemoryProjects)
    locks: WorkerDayLocks = field(default_factory=WorkerDayLocks)

    def __post_init__(self):
        self.validator = AssignmentValidator(self.workers, self.attendance, self.tasks)
        self.eligibility = EligibilityService(self.workers, self.attendance, self.tasks)
        self.team_sync = ProjectTeamSynchronizer(self.projects)
        self.task_service = TaskService(self.tasks, self.projects, self.validator, self.team_sync, self.locks)
        self.worker_service = WorkerService(self.workers)
        self.project_service = ProjectService(self.projects)

    def add_worker(
        self,
        worker_id: int,
        name: Optional[str] = None,
        *,
        status: WorkerStatus = WorkerStatus.ACTIVE,
        inactive_from: Optional[date] = None,
        hours: float = 8,
        role: Role = Role.WORKER,
    ) -> Worker:
        return self.workers.add(
            Worker(
                worker_id=worker_id,
                name=name or f"Worker {worker_id}",
                role=role,
                status=status,
                inactive_from=inactive_from,
                working_hours_per_day=hours,
            )
        )

    def mark(self, worker_id: int, status: AttendanceStatus, work_date: date = TASK_DATE) -> None:
        self.attendance.upsert(worker_id=worker_id, work_date=work_date, status=status)

    def add_project(self, project_id: int = 1, *, end_date: date = date(2099, 12, 31), roster=()) -> Project:
        return self.projects.add(
            Project(project_id=project_id, name=f"P{project_id}", end_date=end_date, assigned_workers=frozenset(roster))
        )

    def create(
        self,
        worker_ids: Sequence[int],
        start: Optional[str] = None,
        end: Optional[str] = None,
        *,
        due: date = TASK_DATE,
        project_id: int = 1,
        title: str = "Task",
    ) -> TaskWriteResult:
        return self.task_service.create_task(
            NewTask(
                project_id=project_id,
                title=title,
                due_date=due,
                assigned_workers=list(worker_ids),
                start_time=start,
                end_time=end,
            )
        )


@pytest.fixture
def world() -> World:
    w = World()
    w.add_project()
    return w


@pytest.fixture
def client(world: World, monkeypatch):
    """Flask test client over the in-memory world."""
    monkeypatch.setenv("APP_ENV", "testing")
    container = Container(
        conn=None,
        workers_repo=world.workers,
        attendance_repo=world.attendance,
        projects_repo=world.projects,
        tasks_repo=world.tasks,
        worker_day_locks=world.locks,
        eligibility_service=world.eligibility,
        assignment_validator=world.validator,
        team_sync=world.team_sync,
        task_service=world.task_service,
        worker_service=world.worker_service,
        project_service=world.project_service,
    )
    return create_app(container=container).test_client()
