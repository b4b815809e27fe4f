from __future__ import annotations

"""
Repository d'accès aux factures, lignes de facture et paramètres de facturation.

Principes:
- Pas de commit() ici : le service de facturation porte la transaction
  (numérotation + facture + lignes dans le même unit of work).
- `invoice_settings` est un singleton : `get_settings` le crée au premier accès.
"""

import re
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from creomotion.core.config import settings
from creomotion.infrastructure.persistence.database.models.invoice import (
    Invoice,
    InvoiceLineItem,
    InvoiceSettings,
)


class InvoiceRepository:
    """Factures + lignes + paramètres."""

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------
    # Factures
    # ---------------------------

    def get(self, invoice_id: UUID) -> Optional[Invoice]:
        return self.db.get(Invoice, invoice_id)

    def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        return self.db.scalar(select(Invoice).where(Invoice.invoice_number == invoice_number))

    def list(
        self,
        *,
        project_id: UUID | None = None,
        client_id: UUID | None = None,
        status: str | None = None,
    ) -> list[Invoice]:
        stmt = select(Invoice).order_by(Invoice.created_at.desc())
        if project_id is not None:
            stmt = stmt.where(Invoice.project_id == project_id)
        if client_id is not None:
            stmt = stmt.where(Invoice.client_id == client_id)
        if status:
            stmt = stmt.where(Invoice.status == status)
        return list(self.db.scalars(stmt))

    def highest_number(self, prefix: str) -> int:
        """
        Plus grand N parmi les numéros `PREFIX-NNNN` existants (0 si aucun).
        Les numéros saisis à la main qui ne suivent pas le format sont ignorés.
        """
        pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
        numbers = self.db.scalars(
            select(Invoice.invoice_number).where(Invoice.invoice_number.like(f"{prefix}-%"))
        )
        highest = 0
        for number in numbers:
            m = pattern.match(number or "")
            if m:
                highest = max(highest, int(m.group(1)))
        return highest

    def create(self, **fields: Any) -> Invoice:
        invoice = Invoice(**fields)
        self.db.add(invoice)
        self.db.flush()
        return invoice

    def update(self, invoice: Invoice, **fields: Any) -> Invoice:
        for key, value in fields.items():
            setattr(invoice, key, value)
        self.db.flush()
        return invoice

    def delete(self, invoice: Invoice) -> None:
        self.db.delete(invoice)
        self.db.flush()

    # ---------------------------
    # Lignes
    # ---------------------------

    def replace_line_items(self, invoice: Invoice, items: Iterable[dict[str, Any]]) -> list[InvoiceLineItem]:
        """Supprime toutes les lignes de la facture puis recrée `items` (même transaction)."""
        self.db.execute(delete(InvoiceLineItem).where(InvoiceLineItem.invoice_id == invoice.id))
        self.db.expire(invoice, ["line_items"])
        created: list[InvoiceLineItem] = []
        for position, item in enumerate(items):
            line = InvoiceLineItem(invoice_id=invoice.id, position=position, **item)
            self.db.add(line)
            created.append(line)
        self.db.flush()
        self.db.expire(invoice, ["line_items"])
        return created

    # ---------------------------
    # Paramètres (singleton)
    # ---------------------------

    def find_settings(self) -> Optional[InvoiceSettings]:
        return self.db.scalar(select(InvoiceSettings).limit(1))

    def get_settings(self) -> InvoiceSettings:
        """Retourne la ligne de paramètres, créée avec les valeurs par défaut si absente."""
        row = self.find_settings()
        if row is None:
            row = InvoiceSettings(
                invoice_prefix=settings.INVOICE_DEFAULT_PREFIX,
                next_invoice_number=1,
                email="invoice@creomotion.lt",
                company_address="123 Design Street",
                company_city="Vilnius",
            )
            self.db.add(row)
            self.db.flush()
        return row

    def update_settings(self, row: InvoiceSettings, **fields: Any) -> InvoiceSettings:
        for key, value in fields.items():
            setattr(row, key, value)
        self.db.flush()
        return row
