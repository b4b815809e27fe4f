# server/creomotion/api/v1/serializers/time_entry.py
from __future__ import annotations
from typing import Any, Dict, TYPE_CHECKING

from creomotion.core.utils.datetime import isoformat

if TYPE_CHECKING:
    from creomotion.infrastructure.persistence.database.models.time_entry import TimeEntry


def serialize_time_entry(e: TimeEntry, *, with_refs: bool = False) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": str(e.id),
        "userId": str(e.user_id),
        "projectId": str(e.project_id),
        "taskId": str(e.task_id) if e.task_id else None,
        "description": e.description,
        "duration": e.duration,
        "date": isoformat(e.date),
        "billable": e.billable,
        "hourlyRate": e.hourly_rate,
        "createdAt": isoformat(e.created_at),
    }
    if with_refs:
        data["project"] = {"id": str(e.project.id), "name": e.project.name} if e.project else None
        data["task"] = {"id": str(e.task.id), "name": e.task.name} if e.task else None
    return data
