from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker's attendance on one calendar date."""

    worker_id: int
    work_date: date
    status: AttendanceStatus
