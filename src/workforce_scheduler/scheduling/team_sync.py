from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..projects.model import Project
from ..projects.repository import ProjectRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamSyncResult:
    added: tuple[int, ...]
    team_size: int


class ProjectTeamSynchronizer:
    """Adds newly assigned workers to the project roster. Never removes anyone."""

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    @staticmethod
    def missing_members(project: Project, worker_ids: Sequence[int]) -> list[int]:
        return [w for w in dict.fromkeys(int(w) for w in worker_ids) if w not in project.assigned_workers]

    def sync(self, project: Project, worker_ids: Sequence[int]) -> TeamSyncResult:
        to_add = self.missing_members(project, worker_ids)
        if not to_add:
            return TeamSyncResult(added=(), team_size=len(project.assigned_workers))

        team_size = self._projects.add_workers(project.project_id, to_add)
        logger.info("project %s: added %s to team (size=%d)", project.project_id, to_add, team_size)
        return TeamSyncResult(added=tuple(to_add), team_size=team_size)
