from __future__ import annotations
"""
server/creomotion/api/v1/endpoints/invoices.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Factures et paramètres de facturation.

- GET    /invoices/settings : ADMIN|EDITOR (ligne par défaut créée au premier accès)
- PUT    /invoices/settings : ADMIN
- GET    /invoices          : filtres projectId, clientId, status ; CLIENT = ses factures
- POST   /invoices          : ADMIN|EDITOR ; numéro fourni (409 si doublon) ou généré ;
                              `clientId` doit être le client du projet (400 sinon)
- GET    /invoices/{id}
- PUT    /invoices/{id}     : ADMIN|EDITOR ; `lineItems` = remplacement complet
- PATCH  /invoices/{id}     : ADMIN|EDITOR ; statut seul
- DELETE /invoices/{id}     : ADMIN ; lignes supprimées en cascade

Les routes /settings sont déclarées avant /{invoice_id}.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from creomotion.api.schemas.invoice import InvoiceIn, InvoiceSettingsIn, InvoiceStatusIn, InvoiceUpdate
from creomotion.api.v1.endpoints.projects import get_project_or_404
from creomotion.api.v1.serializers.invoice import serialize_invoice, serialize_invoice_settings
from creomotion.application.services import invoice_service
from creomotion.core.errors import NotFoundError, ValidationError
from creomotion.infrastructure.persistence.database.models.invoice import Invoice
from creomotion.infrastructure.persistence.database.session import get_db
from creomotion.infrastructure.persistence.repositories.client_repository import ClientRepository
from creomotion.infrastructure.persistence.repositories.invoice_repository import InvoiceRepository
from creomotion.presentation.api.deps import (
    RequireAdmin,
    RequireSession,
    RequireStaff,
    SessionClaims,
    ensure_client_access,
    resolve_client_scope,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _invoice_or_404(db: Session, invoice_id: uuid.UUID) -> Invoice:
    invoice = InvoiceRepository(db).get(invoice_id)
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return invoice


def _ensure_client_exists(db: Session, client_id: uuid.UUID) -> None:
    if ClientRepository(db).get(client_id) is None:
        raise NotFoundError("Client not found")


def _ensure_project_client(db: Session, project_id: uuid.UUID, client_id: uuid.UUID) -> None:
    """La facture suit le client du projet."""
    project = get_project_or_404(db, project_id)
    _ensure_client_exists(db, client_id)
    if project.client_id != client_id:
        raise ValidationError("Client does not match project")


# ---------------------------
# Paramètres
# ---------------------------

@router.get("/settings")
def get_invoice_settings(claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    row = InvoiceRepository(db).get_settings()
    db.commit()
    return {"settings": serialize_invoice_settings(row)}


@router.put("/settings")
def update_invoice_settings(body: InvoiceSettingsIn, claims: SessionClaims = RequireAdmin, db: Session = Depends(get_db)):
    repo = InvoiceRepository(db)
    row = repo.update_settings(repo.get_settings(), **body.model_dump())
    db.commit()
    log.info("invoice settings updated by %s", claims.user_id)
    return {"settings": serialize_invoice_settings(row)}


# ---------------------------
# Factures
# ---------------------------

@router.get("")
def list_invoices(
    project_id: uuid.UUID | None = Query(default=None, alias="projectId"),
    client_id: uuid.UUID | None = Query(default=None, alias="clientId"),
    status_filter: str | None = Query(default=None, alias="status"),
    claims: SessionClaims = RequireSession,
    db: Session = Depends(get_db),
):
    if claims.is_client:
        own = resolve_client_scope(db, claims)
        if own is None or (client_id is not None and client_id != own.id):
            return {"invoices": []}
        client_id = own.id
    rows = InvoiceRepository(db).list(project_id=project_id, client_id=client_id, status=status_filter)
    return {"invoices": [serialize_invoice(i) for i in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_invoice(body: InvoiceIn, claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    _ensure_project_client(db, body.project_id, body.client_id)
    fields = body.model_dump(exclude={"invoice_number", "line_items"})
    invoice = invoice_service.create_invoice(
        db,
        invoice_number=body.invoice_number,
        line_items=body.line_items,
        **fields,
    )
    return {"invoice": serialize_invoice(invoice)}


@router.get("/{invoice_id}")
def get_invoice(invoice_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    invoice = _invoice_or_404(db, invoice_id)
    ensure_client_access(db, claims, invoice.client_id)
    return {"invoice": serialize_invoice(invoice)}


@router.put("/{invoice_id}")
def update_invoice(
    invoice_id: uuid.UUID,
    body: InvoiceUpdate,
    claims: SessionClaims = RequireStaff,
    db: Session = Depends(get_db),
):
    invoice = _invoice_or_404(db, invoice_id)
    changes = body.changes()
    for key in ("project_id", "client_id", "amount", "status", "invoice_number", "invoice_date"):
        if key in changes and changes[key] is None:
            changes.pop(key)
    if "project_id" in changes or "client_id" in changes:
        _ensure_project_client(
            db,
            changes.get("project_id", invoice.project_id),
            changes.get("client_id", invoice.client_id),
        )
    if "line_items" in changes:
        changes["line_items"] = body.line_items
    invoice = invoice_service.update_invoice(db, invoice, changes)
    return {"invoice": serialize_invoice(invoice)}


@router.patch("/{invoice_id}")
def patch_invoice_status(
    invoice_id: uuid.UUID,
    body: InvoiceStatusIn,
    claims: SessionClaims = RequireStaff,
    db: Session = Depends(get_db),
):
    invoice = invoice_service.set_status(db, _invoice_or_404(db, invoice_id), body.status)
    return {"invoice": serialize_invoice(invoice)}


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: uuid.UUID, claims: SessionClaims = RequireAdmin, db: Session = Depends(get_db)):
    repo = InvoiceRepository(db)
    repo.delete(_invoice_or_404(db, invoice_id))
    db.commit()
    log.info("invoice %s deleted by %s", invoice_id, claims.user_id)
    return {"success": True}
