from flask import Blueprint, request
import uuid as _uuid
import logging

from utils.cors import cors_response, success_response, json_response, error_response
from utils.validators import validate_task, parse_bool
from auth.decorators import login_required
from auth.errors import ValidationFailed
from services.task_service import (
    list_tasks,
    get_task,
    create_task,
    update_task,
    delete_task,
    bulk_delete_tasks,
    task_stats,
)

logger = logging.getLogger(__name__)
bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")


def _not_found():
    return json_response({"success": False, "error": "NotFound", "message": "Task not found"}, 404)


def _parse_task_id(raw: str):
    try:
        return _uuid.UUID(str(raw))
    except (ValueError, TypeError):
        return None


@bp.route("", methods=["GET", "POST", "OPTIONS"])
@login_required
def tasks(user):
    try:
        if request.method == "GET":
            items = list_tasks(
                user.id,
                completed=parse_bool(request.args.get("completed")),
                date=request.args.get("date"),
                sort_by=request.args.get("sortBy", "createdAt"),
                order=request.args.get("order", "desc"),
            )
            return json_response({
                "success": True,
                "count": len(items),
                "data": [t.to_dict() for t in items],
            })

        # POST
        body = request.get_json(silent=True)
        errors, values = validate_task(body if isinstance(body, dict) else {})
        if errors:
            return error_response(ValidationFailed(errors))
        t = create_task(user.id, values)
        return success_response("Task created successfully", t.to_dict(), 201)
    except Exception:
        logger.exception("Task collection request failed")
        return error_response(None)


@bp.route("/<task_id>", methods=["GET", "PUT", "DELETE", "OPTIONS"])
@login_required
def task_item(user, task_id: str):
    tid = _parse_task_id(task_id)
    if not tid:
        return cors_response("Invalid task ID", 400)

    try:
        if request.method == "GET":
            t = get_task(user.id, tid)
            return success_response("OK", t.to_dict()) if t else _not_found()

        if request.method == "PUT":
            body = request.get_json(silent=True)
            errors, values = validate_task(body if isinstance(body, dict) else {}, partial=True)
            if errors:
                return error_response(ValidationFailed(errors))
            t = update_task(user.id, tid, values)
            return success_response("Task updated successfully", t.to_dict()) if t else _not_found()

        # DELETE
        t = delete_task(user.id, tid)
        return success_response("Task deleted successfully", t.to_dict()) if t else _not_found()
    except Exception:
        logger.exception("Task request failed")
        return error_response(None)


@bp.route("/bulk-delete", methods=["POST", "OPTIONS"])
@login_required
def tasks_bulk_delete(user):
    body = request.get_json(silent=True) or {}
    raw_ids = body.get("taskIds") if isinstance(body, dict) else None
    if not isinstance(raw_ids, list) or not raw_ids:
        return error_response(ValidationFailed(
            [{"field": "taskIds", "message": "Please provide an array of task IDs"}]
        ))

    ids = [tid for tid in (_parse_task_id(r) for r in raw_ids) if tid]
    try:
        deleted = bulk_delete_tasks(user.id, ids)
        return success_response(f"{deleted} task(s) deleted successfully", {"deletedCount": deleted})
    except Exception:
        logger.exception("Bulk delete failed")
        return error_response(None)


@bp.route("/stats/summary", methods=["GET", "OPTIONS"])
@login_required
def tasks_stats(user):
    try:
        return success_response("OK", task_stats(user.id))
    except Exception:
        logger.exception("Fetching task statistics failed")
        return error_response(None)
