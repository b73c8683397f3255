from __future__ import annotations

from ..core.exceptions import NotFoundError
from .model import Project
from .repository import ProjectRepository


class ProjectService:
    """Read side of projects; roster growth happens through task writes."""

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    def get_project(self, project_id: int) -> Project:
        project = self._projects.get_by_id(int(project_id))
        if not project:
            raise NotFoundError("Project not found")
        return project
