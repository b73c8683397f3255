from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, one_row, placeholders, to_date, transaction
from .model import Task, TaskQuery
from .repository import TaskRepository

_COLUMNS = (
    "t.task_id, t.project_id, t.title, t.description, t.status, t.priority, "
    "t.due_date, t.start_time, t.end_time, t.location, t.notes"
)


def _load_workers(cur, task_ids: Sequence[int]) -> dict[int, list[int]]:
    if not task_ids:
        return {}
    cur.execute(
        f"""
        SELECT task_id, worker_id
        FROM task_workers
        WHERE task_id IN ({placeholders(task_ids)})
        ORDER BY task_id, position_no
        """,
        tuple(task_ids),
    )
    out: dict[int, list[int]] = {int(t): [] for t in task_ids}
    for r in all_rows(cur):
        out[int(r["task_id"])].append(int(r["worker_id"]))
    return out


def _row_to_task(row: dict, workers: Sequence[int]) -> Task:
    return Task(
        task_id=int(row["task_id"]),
        project_id=int(row["project_id"]),
        title=row["title"],
        due_date=to_date(row["due_date"]),
        assigned_workers=tuple(workers),
        start_time=row.get("start_time") or None,
        end_time=row.get("end_time") or None,
        status=TaskStatus(row["status"]),
        priority=TaskPriority(row["priority"]),
        description=row.get("description"),
        location=row.get("location"),
        notes=row.get("notes"),
    )


def _write_workers(cur, task_id: int, worker_ids: Sequence[int]) -> None:
    cur.execute("DELETE FROM task_workers WHERE task_id=%s", (int(task_id),))
    if worker_ids:
        cur.executemany(
            "INSERT INTO task_workers(task_id, worker_id, position_no) VALUES(%s,%s,%s)",
            [(int(task_id), int(w), i) for i, w in enumerate(worker_ids)],
        )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM tasks t WHERE t.task_id=%s", (int(task_id),))
            row = one_row(cur)
            if not row:
                return None
            workers = _load_workers(cur, [int(row["task_id"])])
            return _row_to_task(row, workers[int(row["task_id"])])

    def list_for_workers_on_date(
        self,
        worker_ids: Sequence[int],
        work_date: date,
        *,
        exclude_task_id: Optional[int] = None,
    ) -> Sequence[Task]:
        ids = [int(w) for w in worker_ids]
        if not ids:
            return []

        clauses = ["t.due_date=%s", "t.status<>%s", f"tw.worker_id IN ({placeholders(ids)})"]
        params: list[object] = [work_date, TaskStatus.CANCELLED.value, *ids]
        if exclude_task_id is not None:
            clauses.append("t.task_id<>%s")
            params.append(int(exclude_task_id))

        where = " AND ".join(clauses)
        with transaction(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT DISTINCT {_COLUMNS}
                FROM tasks t
                JOIN task_workers tw ON tw.task_id = t.task_id
                WHERE {where}
                ORDER BY t.task_id
                """,
                tuple(params),
            )
            rows = all_rows(cur)
            workers = _load_workers(cur, [int(r["task_id"]) for r in rows])
            return [_row_to_task(r, workers[int(r["task_id"])]) for r in rows]

    def find(self, query: TaskQuery) -> tuple[Sequence[Task], int]:
        clauses: list[str] = []
        params: list[object] = []
        if query.project_id is not None:
            clauses.append("t.project_id=%s")
            params.append(int(query.project_id))
        if query.worker_id is not None:
            clauses.append("EXISTS (SELECT 1 FROM task_workers tw WHERE tw.task_id=t.task_id AND tw.worker_id=%s)")
            params.append(int(query.worker_id))
        if query.status is not None:
            clauses.append("t.status=%s")
            params.append(query.status.value)
        if query.priority is not None:
            clauses.append("t.priority=%s")
            params.append(query.priority.value)
        if query.due_date is not None:
            clauses.append("t.due_date=%s")
            params.append(query.due_date)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT COUNT(*) AS n FROM tasks t {where}", tuple(params))
            total = int((one_row(cur) or {}).get("n", 0))
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM tasks t
                {where}
                ORDER BY t.due_date, t.task_id
                LIMIT %s OFFSET %s
                """,
                (*params, int(query.limit), int(query.offset)),
            )
            rows = all_rows(cur)
            workers = _load_workers(cur, [int(r["task_id"]) for r in rows])
            return [_row_to_task(r, workers[int(r["task_id"])]) for r in rows], total

    def create(self, task: Task) -> int:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO tasks(project_id, title, description, status, priority,
                                  due_date, start_time, end_time, location, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(task.project_id),
                    task.title,
                    task.description,
                    task.status.value,
                    task.priority.value,
                    task.due_date,
                    task.start_time,
                    task.end_time,
                    task.location,
                    task.notes,
                ),
            )
            task_id = int(cur.lastrowid)
            _write_workers(cur, task_id, task.assigned_workers)
            return task_id

    def save(self, task: Task) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute("SELECT task_id FROM tasks WHERE task_id=%s FOR UPDATE", (int(task.task_id),))
            if not one_row(cur):
                return False
            cur.execute(
                """
                UPDATE tasks
                SET project_id=%s, title=%s, description=%s, status=%s, priority=%s,
                    due_date=%s, start_time=%s, end_time=%s, location=%s, notes=%s
                WHERE task_id=%s
                """,
                (
                    int(task.project_id),
                    task.title,
                    task.description,
                    task.status.value,
                    task.priority.value,
                    task.due_date,
                    task.start_time,
                    task.end_time,
                    task.location,
                    task.notes,
                    int(task.task_id),
                ),
            )
            _write_workers(cur, task.task_id, task.assigned_workers)
            return True

    def update_status(self, task_id: int, status: TaskStatus) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute("SELECT task_id FROM tasks WHERE task_id=%s", (int(task_id),))
            if not one_row(cur):
                return False
            cur.execute("UPDATE tasks SET status=%s WHERE task_id=%s", (status.value, int(task_id)))
            return True

    def delete(self, task_id: int) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute("DELETE FROM tasks WHERE task_id=%s", (int(task_id),))
            return cur.rowcount > 0
