from __future__ import annotations
"""server/creomotion/application/services/invoice_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
Facturation : numérotation, création, mise à jour avec remplacement des lignes.

Numérotation (dans la transaction de création) :
    prefix = invoice_settings.invoice_prefix (défaut INVOICE_DEFAULT_PREFIX)
    n      = max(next_invoice_number - 1, plus grand PREFIX-NNNN existant) + 1
    numéro = f"{prefix}-{n:04d}" ; le compteur passe à n + 1.
La contrainte unique sur invoice_number reste le dernier rempart : un
doublon est remonté en 409.
"""
import logging
from typing import Any, Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from creomotion.core.config import settings
from creomotion.core.errors import ConflictError, ValidationError
from creomotion.domain.enums import InvoiceStatus, values
from creomotion.infrastructure.persistence.database.models.invoice import Invoice
from creomotion.infrastructure.persistence.repositories.invoice_repository import InvoiceRepository

log = logging.getLogger(__name__)

DUPLICATE_NUMBER = "Invoice number already exists"


def format_number(prefix: str, n: int) -> str:
    return f"{prefix}-{n:04d}"


def allocate_number(repo: InvoiceRepository) -> str:
    """Réserve le prochain numéro et avance le compteur (sans commit)."""
    row = repo.get_settings()
    prefix = row.invoice_prefix or settings.INVOICE_DEFAULT_PREFIX
    n = max(int(row.next_invoice_number or 1) - 1, repo.highest_number(prefix)) + 1
    repo.update_settings(row, next_invoice_number=n + 1)
    return format_number(prefix, n)


def line_item_rows(items: Iterable[Any]) -> list[dict[str, Any]]:
    """Lignes normalisées ; total = quantité x prix unitaire si absent."""
    rows: list[dict[str, Any]] = []
    for item in items:
        data = item.model_dump() if hasattr(item, "model_dump") else dict(item)
        quantity = float(data.get("quantity") or 1)
        unit_price = float(data.get("unit_price") or 0)
        total = data.get("total")
        rows.append({
            "description": data["description"],
            "quantity": quantity,
            "unit_price": unit_price,
            "total": float(total) if total is not None else round(quantity * unit_price, 2),
        })
    return rows


def create_invoice(db: Session, *, invoice_number: str | None = None, line_items=None, **fields: Any) -> Invoice:
    repo = InvoiceRepository(db)
    status = fields.get("status")
    if status is not None and status not in values(InvoiceStatus):
        raise ValidationError("Invalid status")

    try:
        if invoice_number:
            if repo.get_by_number(invoice_number) is not None:
                raise ConflictError(DUPLICATE_NUMBER)
            number = invoice_number
        else:
            number = allocate_number(repo)
        invoice = repo.create(invoice_number=number, **{k: v for k, v in fields.items() if v is not None})
        if line_items:
            repo.replace_line_items(invoice, line_item_rows(line_items))
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_NUMBER) from exc
    except ConflictError:
        db.rollback()
        raise

    log.info("invoice %s created (project=%s)", invoice.invoice_number, invoice.project_id)
    return invoice


def update_invoice(db: Session, invoice: Invoice, changes: dict[str, Any]) -> Invoice:
    """
    Mise à jour partielle de l'en-tête ; `line_items` présent = remplacement
    complet des lignes, dans la même transaction.
    """
    repo = InvoiceRepository(db)
    changes = dict(changes)
    line_items = changes.pop("line_items", None)
    status = changes.get("status")
    if status is not None and status not in values(InvoiceStatus):
        raise ValidationError("Invalid status")

    number = changes.get("invoice_number")
    if number and number != invoice.invoice_number:
        other = repo.get_by_number(number)
        if other is not None and other.id != invoice.id:
            raise ConflictError(DUPLICATE_NUMBER)

    try:
        repo.update(invoice, **changes)
        if line_items is not None:
            repo.replace_line_items(invoice, line_item_rows(line_items))
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_NUMBER) from exc
    db.refresh(invoice)
    return invoice


def set_status(db: Session, invoice: Invoice, status: str | None) -> Invoice:
    if not status:
        raise ValidationError("Status is required")
    if status not in values(InvoiceStatus):
        raise ValidationError("Invalid status")
    InvoiceRepository(db).update(invoice, status=status)
    db.commit()
    return invoice
