from __future__ import annotations
"""
server/creomotion/api/schemas/invoice.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Pydantic schemas pour les factures et les paramètres de facturation.

- `invoiceNumber` absent : numéro généré (PREFIX-NNNN).
- `lineItems` présent en mise à jour : remplace toutes les lignes.
- `status` validé côté service (message "Invalid status").
"""

import datetime as dt
import uuid

from pydantic import EmailStr, Field

from creomotion.api.schemas.base import CamelModel


class LineItemIn(CamelModel):
    description: str = Field(..., min_length=1)
    quantity: float = Field(default=1, ge=0)
    unit_price: float = 0
    total: float | None = None


class InvoiceIn(CamelModel):
    project_id: uuid.UUID
    client_id: uuid.UUID
    amount: float
    status: str | None = None
    invoice_number: str | None = Field(default=None, min_length=1, max_length=64)
    invoice_date: dt.datetime | None = None
    due_date: dt.datetime | None = None
    line_items: list[LineItemIn] | None = None


class InvoiceUpdate(CamelModel):
    project_id: uuid.UUID | None = None
    client_id: uuid.UUID | None = None
    amount: float | None = None
    status: str | None = None
    invoice_number: str | None = Field(default=None, min_length=1, max_length=64)
    invoice_date: dt.datetime | None = None
    due_date: dt.datetime | None = None
    line_items: list[LineItemIn] | None = None


class InvoiceStatusIn(CamelModel):
    status: str | None = None


class InvoiceSettingsIn(CamelModel):
    company_name: str = Field(..., min_length=1)
    email: EmailStr
    company_address: str = ""
    company_city: str = ""
    company_country: str = "Lithuania"
    company_code: str = ""
    vat_number: str = ""
    is_vat_payer: bool = False
    vat_rate: float = 21
    phone: str = ""
    website: str = ""
    bank_name: str = ""
    bank_iban: str = ""
    bank_swift: str = ""
    invoice_prefix: str = Field(default="CM", min_length=1, max_length=16)
    next_invoice_number: int = Field(default=1, ge=1)
    default_language: str = "lt"
    default_due_days: int = Field(default=14, ge=0)
    default_notes: str = ""
