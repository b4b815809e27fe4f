from __future__ import annotations
"""server/creomotion/infrastructure/persistence/database/models/invoice.py
~~~~~~~~~~~~~~~~~~~~~~~~
Tables invoices, invoice_line_items, invoice_settings.

invoice_settings : une seule ligne (préfixe + compteur de numérotation,
coordonnées société/banque imprimées sur les factures).
"""
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from creomotion.infrastructure.persistence.database.base import Base
from creomotion.core.utils.datetime import utcnow
import uuid
import datetime as dt


class Invoice(Base):
    __tablename__ = "invoices"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    invoice_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    project_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("projects.id"), nullable=False, index=True)
    client_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("clients.id"), nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="DRAFT", index=True)
    invoice_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    due_date: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    project = relationship("Project", back_populates="invoices")
    client = relationship("Client", back_populates="invoices")
    line_items = relationship("InvoiceLineItem", back_populates="invoice", cascade="all, delete-orphan",
                              order_by="InvoiceLineItem.position")


class InvoiceLineItem(Base):
    __tablename__ = "invoice_line_items"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    invoice_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False, default=1)
    unit_price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    total: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    invoice = relationship("Invoice", back_populates="line_items")


class InvoiceSettings(Base):
    __tablename__ = "invoice_settings"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False, default="CREO MOTION")
    company_address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    company_city: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    company_country: Mapped[str] = mapped_column(String(128), nullable=False, default="Lithuania")
    company_code: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    vat_number: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    is_vat_payer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    vat_rate: Mapped[float] = mapped_column(Float, nullable=False, default=21)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    website: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    bank_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    bank_iban: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    bank_swift: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    invoice_prefix: Mapped[str] = mapped_column(String(16), nullable=False, default="CM")
    next_invoice_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    default_language: Mapped[str] = mapped_column(String(8), nullable=False, default="lt")
    default_due_days: Mapped[int] = mapped_column(Integer, nullable=False, default=14)
    default_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
