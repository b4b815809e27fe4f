# server/creomotion/api/v1/serializers/project.py
"""
Sérialise un Project en dictionnaire JSON prêt à exposer.
"""

from __future__ import annotations
from typing import Any, Dict, TYPE_CHECKING

from creomotion.api.v1.serializers.client import serialize_client_summary
from creomotion.core.utils.datetime import isoformat

if TYPE_CHECKING:
    from creomotion.infrastructure.persistence.database.models.project import Project


def serialize_project_summary(p: Project) -> Dict[str, Any]:
    return {
        "id": str(p.id),
        "name": p.name,
        "status": p.status,
        "clientId": str(p.client_id),
        "deadline": isoformat(p.deadline),
        "createdAt": isoformat(p.created_at),
    }


def serialize_project(p: Project, *, counts: Dict[str, int] | None = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": str(p.id),
        "name": p.name,
        "description": p.description,
        "clientId": str(p.client_id),
        "status": p.status,
        "budget": p.budget,
        "deadline": isoformat(p.deadline),
        "createdAt": isoformat(p.created_at),
        "updatedAt": isoformat(p.updated_at),
        "client": serialize_client_summary(p.client) if p.client is not None else None,
    }
    if counts is not None:
        data["_count"] = counts
    return data


def serialize_project_detail(p: Project) -> Dict[str, Any]:
    """Projet + client + saisies de temps + factures (GET /projects/{id})."""
    from creomotion.api.v1.serializers.time_entry import serialize_time_entry
    from creomotion.api.v1.serializers.invoice import serialize_invoice_summary

    data = serialize_project(p)
    data["timeEntries"] = [serialize_time_entry(t) for t in p.time_entries]
    data["invoices"] = [serialize_invoice_summary(i) for i in p.invoices]
    return data
