from __future__ import annotations
"""server/creomotion/infrastructure/persistence/database/models/project.py
~~~~~~~~~~~~~~~~~~~~~~~~
Table projects.
"""
from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from creomotion.infrastructure.persistence.database.base import Base
from creomotion.core.utils.datetime import utcnow
import uuid
import datetime as dt


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    client_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("clients.id"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="DRAFT", index=True)
    budget: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    deadline: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    client = relationship("Client", back_populates="projects")
    tasks = relationship("Task", back_populates="project", cascade="all, delete-orphan")
    time_entries = relationship("TimeEntry", back_populates="project", cascade="all, delete-orphan",
                                order_by="TimeEntry.date.desc()")
    deliverables = relationship("Deliverable", back_populates="project", cascade="all, delete-orphan",
                                order_by="Deliverable.created_at.desc()")
    # pas de cascade : la suppression est refusée tant que des factures existent
    invoices = relationship("Invoice", back_populates="project", order_by="Invoice.created_at.desc()")
