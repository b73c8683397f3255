from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, one_row, to_date, transaction
from .model import Project
from .repository import ProjectRepository


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with transaction(self._conn_factory) as cur:
            cur.execute("SELECT project_id, name, end_date FROM projects WHERE project_id=%s", (int(project_id),))
            row = one_row(cur)
            if not row:
                return None

            cur.execute("SELECT worker_id FROM project_workers WHERE project_id=%s", (int(project_id),))
            roster = frozenset(int(r["worker_id"]) for r in all_rows(cur))
            return Project(
                project_id=int(row["project_id"]),
                name=row["name"],
                end_date=to_date(row["end_date"]),
                assigned_workers=roster,
            )

    def add_workers(self, project_id: int, worker_ids: Sequence[int]) -> int:
        with transaction(self._conn_factory) as cur:
            if worker_ids:
                # INSERT IGNORE keeps the roster a set under the (project_id, worker_id) key.
                cur.executemany(
                    "INSERT IGNORE INTO project_workers(project_id, worker_id) VALUES(%s,%s)",
                    [(int(project_id), int(w)) for w in worker_ids],
                )
            cur.execute("SELECT COUNT(*) AS n FROM project_workers WHERE project_id=%s", (int(project_id),))
            row = one_row(cur)
            return int(row["n"]) if row else 0
