from __future__ import annotations

from datetime import date
from typing import Collection, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, one_row, placeholders, to_date, transaction
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _row_to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        worker_id=int(row["worker_id"]),
        work_date=to_date(row["work_date"]),
        status=AttendanceStatus(row["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_worker_and_date(self, worker_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                "SELECT worker_id, work_date, status FROM attendance WHERE worker_id=%s AND work_date=%s",
                (int(worker_id), work_date),
            )
            row = one_row(cur)
            return _row_to_record(row) if row else None

    def list_for_date(
        self,
        work_date: date,
        *,
        worker_ids: Optional[Sequence[int]] = None,
        statuses: Optional[Collection[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date=%s"]
        params: list[object] = [work_date]
        if worker_ids is not None:
            ids = [int(w) for w in worker_ids]
            if not ids:
                return []
            clauses.append(f"worker_id IN ({placeholders(ids)})")
            params.extend(ids)
        if statuses is not None:
            values = [s.value for s in statuses]
            if not values:
                return []
            clauses.append(f"status IN ({placeholders(values)})")
            params.extend(values)

        where = " AND ".join(clauses)
        with transaction(self._conn_factory) as cur:
            cur.execute(
                f"SELECT worker_id, work_date, status FROM attendance WHERE {where} ORDER BY worker_id",
                tuple(params),
            )
            return [_row_to_record(r) for r in all_rows(cur)]

    def upsert(self, *, worker_id: int, work_date: date, status: AttendanceStatus) -> None:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO attendance(worker_id, work_date, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (int(worker_id), work_date, status.value),
            )
