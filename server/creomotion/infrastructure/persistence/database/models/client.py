from __future__ import annotations
"""server/creomotion/infrastructure/persistence/database/models/client.py
~~~~~~~~~~~~~~~~~~~~~~~~
Table clients.

`password_hash` renseigné = accès au portail client.
"""
from sqlalchemy import DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from creomotion.infrastructure.persistence.database.base import Base
from creomotion.core.utils.datetime import utcnow
import uuid
import datetime as dt


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    company_code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    vat_code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # pas de cascade : la suppression d'un client avec projets est refusée en amont
    projects = relationship("Project", back_populates="client", order_by="Project.created_at.desc()")
    invoices = relationship("Invoice", back_populates="client", order_by="Invoice.created_at.desc()")
