from __future__ import annotations
"""server/creomotion/infrastructure/persistence/database/models/task.py
~~~~~~~~~~~~~~~~~~~~~~~~
Table tasks (tâches d'un projet, ordonnées).
"""
from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from creomotion.infrastructure.persistence.database.base import Base
from creomotion.core.utils.datetime import utcnow
import uuid
import datetime as dt


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="OTHER")
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="TODO")
    estimated_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    project = relationship("Project", back_populates="tasks")
    # suppression d'une tâche : task_id des saisies remis à NULL
    time_entries = relationship("TimeEntry", back_populates="task")
