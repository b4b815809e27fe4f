from __future__ import annotations
"""server/creomotion/infrastructure/persistence/repositories/time_entry_repository.py
~~~~~~~~~~~~~~~~~~~~~~~~
Accès aux saisies de temps. Pas de commit ici.
"""
import datetime as dt
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from creomotion.infrastructure.persistence.database.models.time_entry import TimeEntry


class TimeEntryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, entry_id: UUID) -> Optional[TimeEntry]:
        return self.db.get(TimeEntry, entry_id)

    def list(
        self,
        *,
        project_id: UUID | None = None,
        user_id: UUID | None = None,
        start_date: dt.datetime | None = None,
        end_date: dt.datetime | None = None,
        billable: bool | None = None,
    ) -> list[TimeEntry]:
        """Saisies filtrées, date la plus récente en premier."""
        stmt = select(TimeEntry)
        if project_id is not None:
            stmt = stmt.where(TimeEntry.project_id == project_id)
        if user_id is not None:
            stmt = stmt.where(TimeEntry.user_id == user_id)
        if start_date is not None:
            stmt = stmt.where(TimeEntry.date >= start_date)
        if end_date is not None:
            stmt = stmt.where(TimeEntry.date <= end_date)
        if billable is not None:
            stmt = stmt.where(TimeEntry.billable.is_(billable))
        stmt = stmt.order_by(TimeEntry.date.desc(), TimeEntry.created_at.desc())
        return list(self.db.scalars(stmt))

    def create(self, **fields: Any) -> TimeEntry:
        entry = TimeEntry(**fields)
        self.db.add(entry)
        self.db.flush()
        return entry

    def update(self, entry: TimeEntry, **fields: Any) -> TimeEntry:
        for key, value in fields.items():
            setattr(entry, key, value)
        self.db.flush()
        return entry

    def delete(self, entry: TimeEntry) -> None:
        self.db.delete(entry)
        self.db.flush()
