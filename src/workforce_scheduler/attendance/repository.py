from __future__ import annotations

from datetime import date
from typing import Collection, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_worker_and_date(self, worker_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(
        self,
        work_date: date,
        *,
        worker_ids: Optional[Sequence[int]] = None,
        statuses: Optional[Collection[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records on `work_date`, optionally narrowed to some workers and/or statuses."""

        raise NotImplementedError

    def upsert(self, *, worker_id: int, work_date: date, status: AttendanceStatus) -> None:
        """Administrative write used by seeding; capture itself lives elsewhere."""

        raise NotImplementedError
