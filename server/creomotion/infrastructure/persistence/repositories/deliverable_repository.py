from __future__ import annotations
"""server/creomotion/infrastructure/persistence/repositories/deliverable_repository.py
~~~~~~~~~~~~~~~~~~~~~~~~
Accès aux livrables et à leur historique de revues. Pas de commit ici.
"""
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from creomotion.infrastructure.persistence.database.models.deliverable import Deliverable, DeliverableReview
from creomotion.infrastructure.persistence.database.models.project import Project


class DeliverableRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, deliverable_id: UUID) -> Optional[Deliverable]:
        return self.db.get(Deliverable, deliverable_id)

    def list(self, *, project_id: UUID | None = None, client_id: UUID | None = None) -> list[Deliverable]:
        stmt = select(Deliverable).order_by(Deliverable.created_at.desc())
        if project_id is not None:
            stmt = stmt.where(Deliverable.project_id == project_id)
        if client_id is not None:
            stmt = stmt.join(Project, Project.id == Deliverable.project_id).where(Project.client_id == client_id)
        return list(self.db.scalars(stmt))

    def max_version(self, project_id: UUID, name: str) -> int | None:
        return self.db.scalar(
            select(func.max(Deliverable.version)).where(
                Deliverable.project_id == project_id,
                Deliverable.name == name,
            )
        )

    def create(self, **fields: Any) -> Deliverable:
        deliverable = Deliverable(**fields)
        self.db.add(deliverable)
        self.db.flush()
        return deliverable

    def update(self, deliverable: Deliverable, **fields: Any) -> Deliverable:
        for key, value in fields.items():
            setattr(deliverable, key, value)
        self.db.flush()
        return deliverable

    def delete(self, deliverable: Deliverable) -> None:
        self.db.delete(deliverable)
        self.db.flush()

    # ---------------------------
    # Revues
    # ---------------------------

    def add_review(self, deliverable: Deliverable, **fields: Any) -> DeliverableReview:
        review = DeliverableReview(deliverable_id=deliverable.id, **fields)
        self.db.add(review)
        self.db.flush()
        return review

    def list_reviews(self, deliverable_id: UUID) -> list[DeliverableReview]:
        stmt = (
            select(DeliverableReview)
            .where(DeliverableReview.deliverable_id == deliverable_id)
            .order_by(DeliverableReview.created_at.desc())
        )
        return list(self.db.scalars(stmt))
