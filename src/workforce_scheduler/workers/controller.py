from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import api_errors, json_body
from ..common.datetime_utils import format_date
from ..common.validators import optional_date, require_date
from ..core.exceptions import ValidationError
from ..container import Container
from ..tasks.controller import task_page_to_json
from ..tasks.service import build_query
from .model import Worker


def worker_to_json(worker: Worker) -> dict:
    return {
        "workerId": worker.worker_id,
        "name": worker.name,
        "status": worker.status.value,
        "inactiveFrom": format_date(worker.inactive_from) if worker.inactive_from else None,
        "workingHoursPerDay": worker.working_hours_per_day,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/workers/<int:worker_id>/status", methods=["PUT"], endpoint="update_worker_status")
    @api_errors
    def update_worker_status(worker_id: int):
        body = json_body()
        status = body.get("status")
        if not status:
            raise ValidationError("status is required")

        inactive_from = None
        if body.get("inactiveFrom"):
            inactive_from = require_date(body.get("inactiveFrom"), "inactiveFrom")

        worker = container.worker_service.change_status(worker_id, status=status, inactive_from=inactive_from)
        return jsonify({"success": True, "data": worker_to_json(worker), "message": "Worker status updated successfully"})

    @app.route("/api/workers/<int:worker_id>/tasks", methods=["GET"], endpoint="list_worker_tasks")
    @api_errors
    def list_worker_tasks(worker_id: int):
        worker = container.worker_service.get_worker(worker_id)
        args = request.args
        query = build_query(
            worker_id=worker.worker_id,
            status=args.get("status"),
            priority=args.get("priority"),
            due_date=optional_date(args.get("date"), "date"),
            page=args.get("page"),
            limit=args.get("limit"),
        )
        return jsonify(task_page_to_json(container.task_service.list_tasks(query)))
