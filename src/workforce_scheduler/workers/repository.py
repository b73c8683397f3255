from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import WorkerStatus
from .model import Worker


class WorkerRepository(Protocol):
    """Repository interface for workers.

    Services depend on this Protocol, not on a concrete database.
    """

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def get_many(self, worker_ids: Sequence[int]) -> Sequence[Worker]:
        """Return the workers that exist among `worker_ids` (any order)."""

        raise NotImplementedError

    def set_status(self, worker_id: int, *, status: WorkerStatus, inactive_from: Optional[date]) -> bool:
        raise NotImplementedError
