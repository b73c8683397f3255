from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..core.enums import WorkerStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Worker
from .repository import WorkerRepository

logger = logging.getLogger(__name__)


class WorkerService:
    """Use case: worker lifecycle changes that the scheduler depends on."""

    def __init__(self, workers: WorkerRepository):
        self._workers = workers

    def get_worker(self, worker_id: int) -> Worker:
        worker = self._workers.get_by_id(int(worker_id))
        if not worker:
            raise NotFoundError("Worker not found")
        return worker

    def change_status(
        self,
        worker_id: int,
        *,
        status: WorkerStatus | str,
        inactive_from: Optional[date] = None,
    ) -> Worker:
        """Set a worker's status.

        Business rule:
        - inactive requires `inactive_from` (first day NOT active).
        - active clears `inactive_from` (reactivation).
        - `inactive_from` given with any other status is ignored.
        """

        try:
            new_status = WorkerStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid worker status: {status!r}")

        worker = self._workers.get_by_id(int(worker_id))
        if not worker:
            raise NotFoundError("Worker not found")

        if new_status == WorkerStatus.INACTIVE:
            if inactive_from is None:
                raise ValidationError("Inactive From date is required when setting status to inactive")
        elif new_status == WorkerStatus.ACTIVE:
            inactive_from = None
        else:
            inactive_from = worker.inactive_from

        self._workers.set_status(worker.worker_id, status=new_status, inactive_from=inactive_from)
        logger.info("worker %s status %s -> %s (inactive_from=%s)", worker.worker_id, worker.status.value, new_status.value, inactive_from)

        updated = self._workers.get_by_id(worker.worker_id)
        if not updated:
            raise NotFoundError("Worker not found")
        return updated
