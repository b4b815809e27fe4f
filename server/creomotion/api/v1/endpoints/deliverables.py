from __future__ import annotations
"""
server/creomotion/api/v1/endpoints/deliverables.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Livrables et revues client.

- GET    /deliverables                        : filtres projectId / clientId ; CLIENT = ses projets
- POST   /deliverables                        : ADMIN|EDITOR ; version suivante pour (projet, nom)
- GET    /deliverables/{id}
- PUT    /deliverables/{id}                   : CLIENT = APPROVED/REJECTED + commentaire seulement
- POST   /deliverables/{id}/approve           : statut APPROVED + revue
- POST   /deliverables/{id}/request-changes   : statut REJECTED + revue
- GET    /deliverables/{id}/reviews           : historique, plus récent d'abord
- DELETE /deliverables/{id}                   : ADMIN|EDITOR
"""

import logging
import uuid

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from creomotion.api.schemas.deliverable import DeliverableIn, DeliverableUpdate, ReviewIn
from creomotion.api.v1.endpoints.projects import get_project_or_404
from creomotion.api.v1.serializers.deliverable import serialize_deliverable, serialize_review
from creomotion.application.services import deliverable_service
from creomotion.core.errors import NotFoundError
from creomotion.domain.enums import ReviewDecision
from creomotion.infrastructure.persistence.database.models.deliverable import Deliverable
from creomotion.infrastructure.persistence.database.session import get_db
from creomotion.infrastructure.persistence.repositories.deliverable_repository import DeliverableRepository
from creomotion.presentation.api.deps import (
    RequireSession,
    RequireStaff,
    SessionClaims,
    ensure_client_access,
    resolve_client_scope,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/deliverables", tags=["deliverables"])


def _accessible(db: Session, claims: SessionClaims, deliverable_id: uuid.UUID) -> Deliverable:
    deliverable = DeliverableRepository(db).get(deliverable_id)
    if deliverable is None:
        raise NotFoundError("Deliverable not found")
    ensure_client_access(db, claims, deliverable.project.client_id)
    return deliverable


@router.get("")
def list_deliverables(
    project_id: uuid.UUID | None = Query(default=None, alias="projectId"),
    client_id: uuid.UUID | None = Query(default=None, alias="clientId"),
    claims: SessionClaims = RequireSession,
    db: Session = Depends(get_db),
):
    if claims.is_client:
        own = resolve_client_scope(db, claims)
        if own is None or (client_id is not None and client_id != own.id):
            return {"deliverables": []}
        client_id = own.id
    rows = DeliverableRepository(db).list(project_id=project_id, client_id=client_id)
    return {"deliverables": [serialize_deliverable(d) for d in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_deliverable(body: DeliverableIn, claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    project = get_project_or_404(db, body.project_id)
    fields = body.model_dump(exclude={"project_id", "name"})
    deliverable = deliverable_service.create_deliverable(db, project_id=project.id, name=body.name, **fields)
    log.info("deliverable %s v%s created by %s", deliverable.id, deliverable.version, claims.user_id)
    return {"deliverable": serialize_deliverable(deliverable)}


@router.get("/{deliverable_id}")
def get_deliverable(deliverable_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    return {"deliverable": serialize_deliverable(_accessible(db, claims, deliverable_id))}


@router.put("/{deliverable_id}")
def update_deliverable(
    deliverable_id: uuid.UUID,
    body: DeliverableUpdate,
    claims: SessionClaims = RequireSession,
    db: Session = Depends(get_db),
):
    deliverable = _accessible(db, claims, deliverable_id)
    deliverable = deliverable_service.update_deliverable(db, deliverable, body.changes(), actor=claims)
    return {"deliverable": serialize_deliverable(deliverable)}


def _decide(db: Session, claims: SessionClaims, deliverable_id: uuid.UUID, decision: str, body: ReviewIn | None) -> dict:
    deliverable = _accessible(db, claims, deliverable_id)
    review = deliverable_service.decide(
        db, deliverable, decision, notes=body.notes if body else None, actor=claims,
    )
    return {
        "review": serialize_review(review),
        "status": deliverable.status,
        "deliverable": serialize_deliverable(deliverable),
    }


@router.post("/{deliverable_id}/approve")
def approve_deliverable(
    deliverable_id: uuid.UUID,
    body: ReviewIn | None = Body(default=None),
    claims: SessionClaims = RequireSession,
    db: Session = Depends(get_db),
):
    return _decide(db, claims, deliverable_id, ReviewDecision.APPROVED.value, body)


@router.post("/{deliverable_id}/request-changes")
def request_changes(
    deliverable_id: uuid.UUID,
    body: ReviewIn | None = Body(default=None),
    claims: SessionClaims = RequireSession,
    db: Session = Depends(get_db),
):
    return _decide(db, claims, deliverable_id, ReviewDecision.CHANGES_REQUESTED.value, body)


@router.get("/{deliverable_id}/reviews")
def list_reviews(deliverable_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    deliverable = _accessible(db, claims, deliverable_id)
    reviews = DeliverableRepository(db).list_reviews(deliverable.id)
    return {"reviews": [serialize_review(r) for r in reviews]}


@router.delete("/{deliverable_id}")
def delete_deliverable(deliverable_id: uuid.UUID, claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    repo = DeliverableRepository(db)
    deliverable = repo.get(deliverable_id)
    if deliverable is None:
        raise NotFoundError("Deliverable not found")
    repo.delete(deliverable)
    db.commit()
    return {"success": True}
