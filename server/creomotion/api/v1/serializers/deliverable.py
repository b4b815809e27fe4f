# server/creomotion/api/v1/serializers/deliverable.py
"""
Sérialise un Deliverable (et ses revues) en dictionnaire JSON prêt à exposer.
"""

from __future__ import annotations
from typing import Any, Dict, TYPE_CHECKING

from creomotion.api.v1.serializers.client import serialize_client_summary
from creomotion.core.utils.datetime import isoformat

if TYPE_CHECKING:
    from creomotion.infrastructure.persistence.database.models.deliverable import Deliverable, DeliverableReview


def serialize_deliverable(d: Deliverable) -> Dict[str, Any]:
    project = d.project
    return {
        "id": str(d.id),
        "projectId": str(d.project_id),
        "name": d.name,
        "description": d.description,
        "status": d.status,
        "version": d.version,
        "fileUrl": d.file_url,
        "thumbnailUrl": d.thumbnail_url,
        "fileSize": d.file_size,
        "mimeType": d.mime_type,
        "googleDriveId": d.google_drive_id,
        "createdAt": isoformat(d.created_at),
        "updatedAt": isoformat(d.updated_at),
        "project": {
            "id": str(project.id),
            "name": project.name,
            "clientId": str(project.client_id),
            "client": serialize_client_summary(project.client) if project.client is not None else None,
        } if project is not None else None,
    }


def serialize_review(r: DeliverableReview) -> Dict[str, Any]:
    return {
        "id": str(r.id),
        "deliverableId": str(r.deliverable_id),
        "decision": r.decision,
        "notes": r.notes,
        "reviewerId": str(r.reviewer_id),
        "reviewerType": r.reviewer_type,
        "createdAt": isoformat(r.created_at),
    }
