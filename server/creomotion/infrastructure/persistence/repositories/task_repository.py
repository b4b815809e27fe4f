from __future__ import annotations
"""server/creomotion/infrastructure/persistence/repositories/task_repository.py
~~~~~~~~~~~~~~~~~~~~~~~~
Accès aux tâches + agrégats de temps passé. Pas de commit ici.
"""
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from creomotion.infrastructure.persistence.database.models.task import Task
from creomotion.infrastructure.persistence.database.models.time_entry import TimeEntry


class TaskRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, task_id: UUID) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def list_for_project(self, project_id: UUID) -> list[Task]:
        stmt = (
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.order.asc(), Task.created_at.asc())
        )
        return list(self.db.scalars(stmt))

    def next_order(self, project_id: UUID) -> int:
        """max(order) + 1, ou 0 pour la première tâche du projet."""
        current = self.db.scalar(select(func.max(Task.order)).where(Task.project_id == project_id))
        return 0 if current is None else int(current) + 1

    def time_totals(self, task_ids: list[UUID]) -> dict[UUID, dict[str, int]]:
        """
        Secondes saisies par tâche : {task_id: {"total", "billable", "count"}}.
        Une seule requête groupée pour toute la liste.
        """
        if not task_ids:
            return {}
        stmt = (
            select(
                TimeEntry.task_id,
                func.coalesce(func.sum(TimeEntry.duration), 0),
                func.coalesce(func.sum(case((TimeEntry.billable.is_(True), TimeEntry.duration), else_=0)), 0),
                func.count(TimeEntry.id),
            )
            .where(TimeEntry.task_id.in_(task_ids))
            .group_by(TimeEntry.task_id)
        )
        return {
            task_id: {"total": int(total), "billable": int(billable), "count": int(count)}
            for task_id, total, billable, count in self.db.execute(stmt)
        }

    def create(self, **fields: Any) -> Task:
        task = Task(**fields)
        self.db.add(task)
        self.db.flush()
        return task

    def update(self, task: Task, **fields: Any) -> Task:
        for key, value in fields.items():
            setattr(task, key, value)
        self.db.flush()
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        self.db.flush()
