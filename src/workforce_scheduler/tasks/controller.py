from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import api_errors, json_body
from ..common.datetime_utils import format_date
from ..common.validators import optional_date, require_date
from ..core.exceptions import ValidationError
from ..container import Container
from ..scheduling.eligibility import EligibleWorker
from .model import Task
from .service import NewTask, TaskPage, TaskWriteResult, build_query

# JSON body key -> TaskService field name
_BODY_FIELDS = {
    "title": "title",
    "description": "description",
    "priority": "priority",
    "status": "status",
    "dueDate": "due_date",
    "startTime": "start_time",
    "endTime": "end_time",
    "location": "location",
    "notes": "notes",
    "assignedTo": "assigned_to",
    "assignedWorkers": "assigned_workers",
    "projectId": "project_id",
    "project": "project_id",
}


def task_to_json(task: Task) -> dict:
    return {
        "taskId": task.task_id,
        "projectId": task.project_id,
        "title": task.title,
        "description": task.description or "",
        "status": task.status.value,
        "priority": task.priority.value,
        "dueDate": format_date(task.due_date),
        "startTime": task.start_time or "",
        "endTime": task.end_time or "",
        "assignedTo": task.assigned_to,
        "assignedWorkers": list(task.assigned_workers),
        "location": task.location or "",
        "notes": task.notes or "",
    }


def eligible_worker_to_json(w: EligibleWorker) -> dict:
    return {
        "workerId": w.worker_id,
        "name": w.name,
        "position": w.position,
        "attendanceStatus": w.attendance_status.value,
        "availabilityLabel": w.availability_label,
        "capacityHours": w.capacity_hours,
        "assignedHours": w.assigned_hours,
        "remainingHours": w.remaining_hours,
        "canAssign": w.can_assign,
        "blockedReason": w.blocked_reason,
    }


def _write_result_json(result: TaskWriteResult) -> dict:
    payload = {
        "success": True,
        "data": task_to_json(result.task),
        "message": result.message,
    }
    if result.project_team_size is not None:
        payload["meta"] = {
            "workersAddedToProject": result.workers_added_to_project,
            "projectTeamSize": result.project_team_size,
        }
    return payload


def task_page_to_json(page: TaskPage) -> dict:
    return {
        "success": True,
        "data": [task_to_json(t) for t in page.tasks],
        "message": "Tasks loaded successfully",
        "pagination": {"page": page.page, "limit": page.limit, "total": page.total, "pages": page.pages},
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    @api_errors
    def list_tasks():
        args = request.args
        query = build_query(
            project_id=args.get("projectId") or args.get("project"),
            worker_id=args.get("assignedTo"),
            status=args.get("status"),
            priority=args.get("priority"),
            due_date=optional_date(args.get("date"), "date"),
            page=args.get("page"),
            limit=args.get("limit"),
        )
        return jsonify(task_page_to_json(container.task_service.list_tasks(query)))

    @app.route("/api/tasks/eligible-workers", methods=["GET"], endpoint="eligible_task_workers")
    @api_errors
    def eligible_task_workers():
        work_date = require_date(request.args.get("date"), "date")
        start_time = (request.args.get("startTime") or "").strip() or None
        end_time = (request.args.get("endTime") or "").strip() or None
        if (start_time is None) != (end_time is None):
            raise ValidationError("startTime and endTime must be provided together")

        report = container.eligibility_service.list_eligible(work_date, start_time=start_time, end_time=end_time)
        return jsonify(
            {
                "success": True,
                "data": [eligible_worker_to_json(w) for w in report.workers],
                "message": report.message,
                "meta": {"date": format_date(report.work_date), "eligibleCount": report.count},
            }
        )

    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    @api_errors
    def create_task():
        body = json_body()
        new = NewTask(
            project_id=body.get("projectId") or body.get("project"),
            title=body.get("title") or "",
            due_date=require_date(body.get("dueDate"), "dueDate"),
            assigned_workers=body.get("assignedWorkers"),
            assigned_to=body.get("assignedTo"),
            start_time=body.get("startTime"),
            end_time=body.get("endTime"),
            priority=body.get("priority") or "medium",
            description=body.get("description"),
            location=body.get("location"),
            notes=body.get("notes"),
        )
        result = container.task_service.create_task(new)
        return jsonify(_write_result_json(result)), 201

    @app.route("/api/tasks/<int:task_id>", methods=["GET"], endpoint="get_task")
    @api_errors
    def get_task(task_id: int):
        task = container.task_service.get_task(task_id)
        return jsonify({"success": True, "data": task_to_json(task), "message": "Task loaded successfully"})

    @app.route("/api/tasks/<int:task_id>", methods=["PUT"], endpoint="update_task")
    @api_errors
    def update_task(task_id: int):
        body = json_body()
        changes = {}
        for key, field_name in _BODY_FIELDS.items():
            if key in body and field_name not in changes:
                changes[field_name] = body[key]
        if "due_date" in changes:
            changes["due_date"] = require_date(changes["due_date"], "dueDate")

        result = container.task_service.update_task(task_id, changes)
        return jsonify(_write_result_json(result))

    @app.route("/api/tasks/<int:task_id>/status", methods=["PUT"], endpoint="update_task_status")
    @api_errors
    def update_task_status(task_id: int):
        status = json_body().get("status")
        if not status:
            raise ValidationError("status is required")
        task = container.task_service.change_status(task_id, status)
        return jsonify({"success": True, "data": task_to_json(task), "message": "Task status updated successfully"})

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"], endpoint="delete_task")
    @api_errors
    def delete_task(task_id: int):
        container.task_service.delete_task(task_id)
        return jsonify({"success": True, "message": "Task deleted successfully"})
