from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def add_workers(self, project_id: int, worker_ids: Sequence[int]) -> int:
        """Union `worker_ids` into the roster (idempotent).

        Returns the roster size afterwards.
        """

        raise NotImplementedError
