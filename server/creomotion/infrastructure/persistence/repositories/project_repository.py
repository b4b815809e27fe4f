from __future__ import annotations
"""server/creomotion/infrastructure/persistence/repositories/project_repository.py
~~~~~~~~~~~~~~~~~~~~~~~~
Accès aux projets. Pas de commit ici.
"""
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from creomotion.infrastructure.persistence.database.models.deliverable import Deliverable
from creomotion.infrastructure.persistence.database.models.invoice import Invoice
from creomotion.infrastructure.persistence.database.models.project import Project
from creomotion.infrastructure.persistence.database.models.time_entry import TimeEntry


class ProjectRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, project_id: UUID) -> Optional[Project]:
        return self.db.get(Project, project_id)

    def list(self, *, client_id: UUID | None = None) -> list[Project]:
        """Projets du plus récent au plus ancien, filtrés par client si fourni."""
        stmt = select(Project).order_by(Project.created_at.desc())
        if client_id is not None:
            stmt = stmt.where(Project.client_id == client_id)
        return list(self.db.scalars(stmt))

    def _count(self, model, project_id: UUID) -> int:
        return int(self.db.scalar(select(func.count(model.id)).where(model.project_id == project_id)) or 0)

    def count_invoices(self, project_id: UUID) -> int:
        return self._count(Invoice, project_id)

    def counts(self, project_id: UUID) -> dict[str, int]:
        return {
            "timeEntries": self._count(TimeEntry, project_id),
            "invoices": self._count(Invoice, project_id),
            "deliverables": self._count(Deliverable, project_id),
        }

    def create(self, **fields: Any) -> Project:
        project = Project(**fields)
        self.db.add(project)
        self.db.flush()
        return project

    def update(self, project: Project, **fields: Any) -> Project:
        for key, value in fields.items():
            setattr(project, key, value)
        self.db.flush()
        return project

    def delete(self, project: Project) -> None:
        # tâches, livrables et saisies de temps suivent (cascade ORM)
        self.db.delete(project)
        self.db.flush()
