from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import DEFAULT_WORKING_HOURS_PER_DAY
from ..core.enums import Role, WorkerStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, one_row, placeholders, to_date, transaction
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = "worker_id, name, position, role, status, inactive_from, working_hours_per_day"


def _row_to_worker(row: dict) -> Worker:
    hours = row.get("working_hours_per_day")
    return Worker(
        worker_id=int(row["worker_id"]),
        name=row["name"],
        role=Role(row["role"]),
        status=WorkerStatus(row["status"]),
        inactive_from=to_date(row.get("inactive_from")),
        working_hours_per_day=float(hours) if hours is not None else DEFAULT_WORKING_HOURS_PER_DAY,
        position=row.get("position"),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE worker_id=%s", (int(worker_id),))
            row = one_row(cur)
            return _row_to_worker(row) if row else None

    def get_many(self, worker_ids: Sequence[int]) -> Sequence[Worker]:
        ids = [int(w) for w in worker_ids]
        if not ids:
            return []
        with transaction(self._conn_factory) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM workers WHERE worker_id IN ({placeholders(ids)})",
                tuple(ids),
            )
            return [_row_to_worker(r) for r in all_rows(cur)]

    def set_status(self, worker_id: int, *, status: WorkerStatus, inactive_from: Optional[date]) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                "UPDATE workers SET status=%s, inactive_from=%s WHERE worker_id=%s",
                (status.value, inactive_from, int(worker_id)),
            )
            return cur.rowcount > 0
