from __future__ import annotations
"""
server/creomotion/api/v1/endpoints/projects.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Projets.

- GET    /projects                   : équipe = tous ; CLIENT = ses projets ([] sans fiche client)
- POST   /projects                   : ADMIN|EDITOR ; le client doit exister (404)
- GET    /projects/{id}              : + client, saisies de temps, factures
- PUT    /projects/{id}              : ADMIN|EDITOR ; partiel, clientId re-vérifié
- DELETE /projects/{id}              : ADMIN ; refusé (400) si des factures existent
- GET    /projects/{id}/time-entries : saisies du projet
(les tâches d'un projet sont dans endpoints/tasks.py)
"""

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from creomotion.api.schemas.project import ProjectIn, ProjectUpdate
from creomotion.api.v1.serializers.project import serialize_project, serialize_project_detail
from creomotion.api.v1.serializers.time_entry import serialize_time_entry
from creomotion.core.errors import DependencyError, NotFoundError
from creomotion.infrastructure.persistence.database.models.project import Project
from creomotion.infrastructure.persistence.database.session import get_db
from creomotion.infrastructure.persistence.repositories.client_repository import ClientRepository
from creomotion.infrastructure.persistence.repositories.project_repository import ProjectRepository
from creomotion.infrastructure.persistence.repositories.time_entry_repository import TimeEntryRepository
from creomotion.presentation.api.deps import (
    RequireAdmin,
    RequireSession,
    RequireStaff,
    SessionClaims,
    ensure_client_access,
    resolve_client_scope,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_or_404(db: Session, project_id: uuid.UUID) -> Project:
    project = ProjectRepository(db).get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


def get_accessible_project(db: Session, claims: SessionClaims, project_id: uuid.UUID) -> Project:
    """404 si absent, 403 si l'appelant CLIENT n'en est pas propriétaire."""
    project = get_project_or_404(db, project_id)
    ensure_client_access(db, claims, project.client_id)
    return project


def _ensure_client_exists(db: Session, client_id: uuid.UUID) -> None:
    if ClientRepository(db).get(client_id) is None:
        raise NotFoundError("Client not found")


@router.get("")
def list_projects(claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    repo = ProjectRepository(db)
    if claims.is_client:
        own = resolve_client_scope(db, claims)
        rows = repo.list(client_id=own.id) if own is not None else []
    else:
        rows = repo.list()
    return {"projects": [serialize_project(p, counts=repo.counts(p.id)) for p in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(body: ProjectIn, claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    _ensure_client_exists(db, body.client_id)
    project = ProjectRepository(db).create(**body.model_dump())
    db.commit()
    log.info("project %s created by %s", project.id, claims.user_id)
    return {"project": serialize_project(project)}


@router.get("/{project_id}")
def get_project(project_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    project = get_accessible_project(db, claims, project_id)
    return {"project": serialize_project_detail(project)}


@router.put("/{project_id}")
def update_project(
    project_id: uuid.UUID,
    body: ProjectUpdate,
    claims: SessionClaims = RequireStaff,
    db: Session = Depends(get_db),
):
    project = get_project_or_404(db, project_id)
    changes = body.changes()
    if changes.get("client_id") is not None and changes["client_id"] != project.client_id:
        _ensure_client_exists(db, changes["client_id"])
    # colonnes non nulles : un null explicite est ignoré
    for key in ("name", "client_id", "status"):
        if key in changes and changes[key] is None:
            changes.pop(key)
    ProjectRepository(db).update(project, **changes)
    db.commit()
    return {"project": serialize_project(project)}


@router.delete("/{project_id}")
def delete_project(project_id: uuid.UUID, claims: SessionClaims = RequireAdmin, db: Session = Depends(get_db)):
    repo = ProjectRepository(db)
    project = get_project_or_404(db, project_id)
    if repo.count_invoices(project.id) > 0:
        raise DependencyError("Cannot delete project with existing invoices. Please delete invoices first.")
    repo.delete(project)
    db.commit()
    log.info("project %s deleted by %s", project_id, claims.user_id)
    return {"success": True}


@router.get("/{project_id}/time-entries")
def list_project_time_entries(
    project_id: uuid.UUID,
    claims: SessionClaims = RequireSession,
    db: Session = Depends(get_db),
):
    project = get_accessible_project(db, claims, project_id)
    entries = TimeEntryRepository(db).list(project_id=project.id)
    return {"timeEntries": [serialize_time_entry(e, with_refs=True) for e in entries]}
