from __future__ import annotations
"""
server/creomotion/api/v1/endpoints/time_entries.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Saisies de temps (`duration` en secondes).

- GET    /time-entries       : filtres projectId, userId, startDate, endDate, billable
                               (un CLIENT ne voit que ses propres saisies)
- POST   /time-entries       : userId = principal de session ; CLIENT = ses projets seulement
- GET / PUT / DELETE /time-entries/{id} : un CLIENT n'accède qu'à ses saisies (403)
"""

import datetime as dt
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from creomotion.api.schemas.time_entry import TimeEntryIn, TimeEntryUpdate
from creomotion.api.v1.endpoints.projects import get_accessible_project
from creomotion.api.v1.serializers.time_entry import serialize_time_entry
from creomotion.core.errors import AuthorizationError, NotFoundError
from creomotion.core.utils.datetime import as_utc
from creomotion.infrastructure.persistence.database.models.time_entry import TimeEntry
from creomotion.infrastructure.persistence.database.session import get_db
from creomotion.infrastructure.persistence.repositories.task_repository import TaskRepository
from creomotion.infrastructure.persistence.repositories.time_entry_repository import TimeEntryRepository
from creomotion.presentation.api.deps import RequireSession, SessionClaims

router = APIRouter(prefix="/time-entries", tags=["time-entries"])


def _owned_entry(db: Session, claims: SessionClaims, entry_id: uuid.UUID) -> TimeEntry:
    entry = TimeEntryRepository(db).get(entry_id)
    if entry is None:
        raise NotFoundError("Time entry not found")
    if claims.is_client and entry.user_id != claims.user_id:
        raise AuthorizationError("Forbidden")
    return entry


def _check_task(db: Session, task_id: uuid.UUID | None, project_id: uuid.UUID) -> None:
    if task_id is None:
        return
    task = TaskRepository(db).get(task_id)
    if task is None or task.project_id != project_id:
        raise NotFoundError("Task not found")


@router.get("")
def list_time_entries(
    project_id: uuid.UUID | None = Query(default=None, alias="projectId"),
    user_id: uuid.UUID | None = Query(default=None, alias="userId"),
    start_date: dt.datetime | None = Query(default=None, alias="startDate"),
    end_date: dt.datetime | None = Query(default=None, alias="endDate"),
    billable: bool | None = Query(default=None),
    claims: SessionClaims = RequireSession,
    db: Session = Depends(get_db),
):
    if claims.is_client:
        if user_id is not None and user_id != claims.user_id:
            return {"timeEntries": []}
        user_id = claims.user_id
    entries = TimeEntryRepository(db).list(
        project_id=project_id,
        user_id=user_id,
        start_date=as_utc(start_date),
        end_date=as_utc(end_date),
        billable=billable,
    )
    return {"timeEntries": [serialize_time_entry(e, with_refs=True) for e in entries]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_time_entry(body: TimeEntryIn, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    project = get_accessible_project(db, claims, body.project_id)
    _check_task(db, body.task_id, project.id)
    entry = TimeEntryRepository(db).create(user_id=claims.user_id, **body.model_dump())
    db.commit()
    return {"timeEntry": serialize_time_entry(entry, with_refs=True)}


@router.get("/{entry_id}")
def get_time_entry(entry_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    return {"timeEntry": serialize_time_entry(_owned_entry(db, claims, entry_id), with_refs=True)}


@router.put("/{entry_id}")
def update_time_entry(
    entry_id: uuid.UUID,
    body: TimeEntryUpdate,
    claims: SessionClaims = RequireSession,
    db: Session = Depends(get_db),
):
    entry = _owned_entry(db, claims, entry_id)
    changes = body.changes()
    for key in ("project_id", "duration", "date", "billable"):
        if key in changes and changes[key] is None:
            changes.pop(key)

    project_id = changes.get("project_id", entry.project_id)
    if "project_id" in changes:
        get_accessible_project(db, claims, project_id)
    if "task_id" in changes or "project_id" in changes:
        _check_task(db, changes.get("task_id", entry.task_id), project_id)

    TimeEntryRepository(db).update(entry, **changes)
    db.commit()
    return {"timeEntry": serialize_time_entry(entry, with_refs=True)}


@router.delete("/{entry_id}")
def delete_time_entry(entry_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    TimeEntryRepository(db).delete(_owned_entry(db, claims, entry_id))
    db.commit()
    return {"success": True}
