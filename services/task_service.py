# services/task_service.py
from __future__ import annotations
import uuid
from typing import List, Optional, Mapping, Iterable

from db import SessionLocal
from models import Task

TASK_FIELDS = {"name", "time", "date", "progress", "completed", "icon", "color"}
SORTABLE_FIELDS = {"createdAt": "created_at", "date": "date", "name": "name", "progress": "progress"}


def _sanitize_patch(data: Mapping | None, allowed: set[str]) -> dict:
    """Return only keys present in `allowed` and non-None values."""
    if not data:
        return {}
    return {k: v for k, v in data.items() if k in allowed and v is not None}


def list_tasks(
    user_id: uuid.UUID,
    completed: Optional[bool] = None,
    date: Optional[str] = None,
    sort_by: str = "createdAt",
    order: str = "desc",
) -> List[Task]:
    column = getattr(Task, SORTABLE_FIELDS.get(sort_by, "created_at"))
    with SessionLocal() as db:
        q = db.query(Task).filter(Task.user_id == user_id)
        if completed is not None:
            q = q.filter(Task.completed == completed)
        if date:
            q = q.filter(Task.date == date)
        return q.order_by(column.asc() if order == "asc" else column.desc()).all()


def get_task(user_id: uuid.UUID, task_id: uuid.UUID) -> Optional[Task]:
    with SessionLocal() as db:
        return db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()


def create_task(user_id: uuid.UUID, fields: Mapping) -> Task:
    data = _sanitize_patch(fields, TASK_FIELDS)
    if data.get("completed"):
        data["progress"] = 100
    with SessionLocal() as db:
        t = Task(user_id=user_id, deadline=f"{data['date']} {data['time']}", **data)
        db.add(t)
        db.commit()
        db.refresh(t)
        return t


def update_task(user_id: uuid.UUID, task_id: uuid.UUID, patch: Mapping) -> Optional[Task]:
    """Unknown keys are dropped. Returns None when the task is not the caller's."""
    patch = _sanitize_patch(patch, TASK_FIELDS)
    with SessionLocal() as db:
        t = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
        if not t:
            return None
        for k, v in patch.items():
            setattr(t, k, v)
        if "date" in patch or "time" in patch:
            t.deadline = f"{t.date} {t.time}"
        if patch.get("completed"):
            t.progress = 100
        db.commit()
        db.refresh(t)
        return t


def delete_task(user_id: uuid.UUID, task_id: uuid.UUID) -> Optional[Task]:
    with SessionLocal() as db:
        t = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
        if not t:
            return None
        db.delete(t)
        db.commit()
        return t


def bulk_delete_tasks(user_id: uuid.UUID, task_ids: Iterable[uuid.UUID]) -> int:
    ids = list(task_ids)
    if not ids:
        return 0
    with SessionLocal() as db:
        rows = (
            db.query(Task)
            .filter(Task.user_id == user_id, Task.id.in_(ids))
            .delete(synchronize_session=False)
        )
        db.commit()
        return rows


def task_stats(user_id: uuid.UUID) -> dict:
    tasks = list_tasks(user_id)
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    in_progress = sum(1 for t in tasks if not t.completed and t.progress > 0)
    pending = sum(1 for t in tasks if not t.completed and t.progress == 0)
    return {
        "totalTasks": total,
        "completedTasks": completed,
        "inProgressTasks": in_progress,
        "pendingTasks": pending,
        "completionPercentage": int(completed * 100 / total + 0.5) if total else 0,
    }
