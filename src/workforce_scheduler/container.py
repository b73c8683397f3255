from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.service import ProjectService
from .scheduling.eligibility import EligibilityService
from .scheduling.locks import WorkerDayLocks
from .scheduling.team_sync import ProjectTeamSynchronizer
from .scheduling.validator import AssignmentValidator
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.service import TaskService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    workers_repo: MySQLWorkerRepository
    attendance_repo: MySQLAttendanceRepository
    projects_repo: MySQLProjectRepository
    tasks_repo: MySQLTaskRepository

    worker_day_locks: WorkerDayLocks
    eligibility_service: EligibilityService
    assignment_validator: AssignmentValidator
    team_sync: ProjectTeamSynchronizer
    task_service: TaskService
    worker_service: WorkerService
    project_service: ProjectService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.shared(DBConfig.from_dict(db_config))

    workers_repo = MySQLWorkerRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    projects_repo = MySQLProjectRepository(conn)
    tasks_repo = MySQLTaskRepository(conn)

    # One lock map per process: every task write goes through it.
    worker_day_locks = WorkerDayLocks()
    eligibility_service = EligibilityService(workers_repo, attendance_repo, tasks_repo)
    assignment_validator = AssignmentValidator(workers_repo, attendance_repo, tasks_repo)
    team_sync = ProjectTeamSynchronizer(projects_repo)
    task_service = TaskService(
        tasks_repo,
        projects_repo,
        assignment_validator,
        team_sync,
        worker_day_locks,
    )
    worker_service = WorkerService(workers_repo)
    project_service = ProjectService(projects_repo)

    return Container(
        conn=conn,
        workers_repo=workers_repo,
        attendance_repo=attendance_repo,
        projects_repo=projects_repo,
        tasks_repo=tasks_repo,
        worker_day_locks=worker_day_locks,
        eligibility_service=eligibility_service,
        assignment_validator=assignment_validator,
        team_sync=team_sync,
        task_service=task_service,
        worker_service=worker_service,
        project_service=project_service,
    )
