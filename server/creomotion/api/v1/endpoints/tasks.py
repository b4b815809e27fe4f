from __future__ import annotations
"""
server/creomotion/api/v1/endpoints/tasks.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Tâches de projet.

- GET  /projects/{id}/tasks : tri par `order` puis création, heures réelles/facturables
- POST /projects/{id}/tasks : ADMIN|EDITOR ; `order` par défaut = max + 1 (0 au départ)
- GET / PATCH / PUT / DELETE /tasks/{id}
  (la suppression détache les saisies de temps : taskId remis à null)
"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from creomotion.api.schemas.task import TaskIn, TaskUpdate
from creomotion.api.v1.endpoints.projects import get_accessible_project, get_project_or_404
from creomotion.api.v1.serializers.task import serialize_task
from creomotion.core.errors import NotFoundError
from creomotion.infrastructure.persistence.database.models.task import Task
from creomotion.infrastructure.persistence.database.session import get_db
from creomotion.infrastructure.persistence.repositories.task_repository import TaskRepository
from creomotion.presentation.api.deps import RequireSession, RequireStaff, SessionClaims, ensure_client_access

router = APIRouter(tags=["tasks"])


def _task_or_404(repo: TaskRepository, task_id: uuid.UUID) -> Task:
    task = repo.get(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


def _serialize_one(repo: TaskRepository, task: Task) -> dict:
    return serialize_task(task, totals=repo.time_totals([task.id]).get(task.id))


@router.get("/projects/{project_id}/tasks")
def list_tasks(project_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    project = get_accessible_project(db, claims, project_id)
    repo = TaskRepository(db)
    tasks = repo.list_for_project(project.id)
    totals = repo.time_totals([t.id for t in tasks])
    return {"tasks": [serialize_task(t, totals=totals.get(t.id)) for t in tasks]}


@router.post("/projects/{project_id}/tasks", status_code=status.HTTP_201_CREATED)
def create_task(
    project_id: uuid.UUID,
    body: TaskIn,
    claims: SessionClaims = RequireStaff,
    db: Session = Depends(get_db),
):
    project = get_project_or_404(db, project_id)
    repo = TaskRepository(db)
    fields = body.model_dump()
    if fields.get("order") is None:
        fields["order"] = repo.next_order(project.id)
    task = repo.create(project_id=project.id, **fields)
    db.commit()
    return {"task": _serialize_one(repo, task)}


@router.get("/tasks/{task_id}")
def get_task(task_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    repo = TaskRepository(db)
    task = _task_or_404(repo, task_id)
    ensure_client_access(db, claims, task.project.client_id)
    return {"task": _serialize_one(repo, task)}


def _update_task(task_id: uuid.UUID, body: TaskUpdate, db: Session) -> dict:
    repo = TaskRepository(db)
    task = _task_or_404(repo, task_id)
    changes = {k: v for k, v in body.changes().items() if v is not None or k in ("description", "estimated_hours")}
    repo.update(task, **changes)
    db.commit()
    return {"task": _serialize_one(repo, task)}


@router.patch("/tasks/{task_id}")
def patch_task(task_id: uuid.UUID, body: TaskUpdate, claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    return _update_task(task_id, body, db)


@router.put("/tasks/{task_id}")
def put_task(task_id: uuid.UUID, body: TaskUpdate, claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    return _update_task(task_id, body, db)


@router.delete("/tasks/{task_id}")
def delete_task(task_id: uuid.UUID, claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    repo = TaskRepository(db)
    repo.delete(_task_or_404(repo, task_id))
    db.commit()
    return {"success": True}
