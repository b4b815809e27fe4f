# server/creomotion/api/v1/serializers/task.py
"""
Sérialise une Task, avec les heures passées calculées depuis les saisies de temps.
"""

from __future__ import annotations
from typing import Any, Dict, TYPE_CHECKING

from creomotion.core.utils.datetime import isoformat

if TYPE_CHECKING:
    from creomotion.infrastructure.persistence.database.models.task import Task


def seconds_to_hours(seconds: int) -> float:
    """Secondes -> heures, arrondi à une décimale."""
    return round((seconds or 0) / 3600, 1)


def serialize_task(t: Task, *, totals: Dict[str, int] | None = None) -> Dict[str, Any]:
    totals = totals or {"total": 0, "billable": 0, "count": 0}
    return {
        "id": str(t.id),
        "projectId": str(t.project_id),
        "name": t.name,
        "description": t.description,
        "category": t.category,
        "status": t.status,
        "estimatedHours": t.estimated_hours,
        "order": t.order,
        "actualHours": seconds_to_hours(totals["total"]),
        "billableHours": seconds_to_hours(totals["billable"]),
        "_count": {"timeEntries": totals["count"]},
        "createdAt": isoformat(t.created_at),
        "updatedAt": isoformat(t.updated_at),
    }
