from __future__ import annotations

from flask import Flask, jsonify

from ..common.api import api_errors
from ..common.datetime_utils import format_date
from ..container import Container
from .model import Project


def project_to_json(project: Project) -> dict:
    return {
        "projectId": project.project_id,
        "name": project.name,
        "endDate": format_date(project.end_date) if project.end_date else None,
        "assignedWorkers": sorted(project.assigned_workers),
        "teamSize": len(project.assigned_workers),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/projects/<int:project_id>", methods=["GET"], endpoint="get_project")
    @api_errors
    def get_project(project_id: int):
        project = container.project_service.get_project(project_id)
        return jsonify({"success": True, "data": project_to_json(project), "message": "Project loaded successfully"})
