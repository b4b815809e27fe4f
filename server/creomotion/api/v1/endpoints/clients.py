from __future__ import annotations
"""
server/creomotion/api/v1/endpoints/clients.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Fiches client.

- GET    /clients       : équipe = tous (par nom, avec _count) ; CLIENT = sa fiche seule
- POST   /clients       : ADMIN|EDITOR ; email unique (409) ; `password` ouvre l'accès portail
- GET    /clients/{id}  : fiche + projets + factures ; CLIENT = la sienne seulement
- PUT    /clients/{id}  : ADMIN|EDITOR ; partiel
- DELETE /clients/{id}  : ADMIN ; refusé (400) tant que des projets existent
"""

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from creomotion.api.schemas.client import ClientIn, ClientUpdate
from creomotion.api.v1.serializers.client import serialize_client, serialize_client_detail
from creomotion.core.errors import ConflictError, DependencyError, NotFoundError
from creomotion.core.security import hash_password
from creomotion.infrastructure.persistence.database.session import get_db
from creomotion.infrastructure.persistence.repositories.client_repository import ClientRepository
from creomotion.presentation.api.deps import (
    RequireAdmin,
    RequireSession,
    RequireStaff,
    SessionClaims,
    ensure_client_access,
    resolve_client_scope,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])

DUPLICATE_EMAIL = "Client with this email already exists"


def _get_or_404(repo: ClientRepository, client_id: uuid.UUID):
    client = repo.get(client_id)
    if client is None:
        raise NotFoundError("Client not found")
    return client


@router.get("")
def list_clients(claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    repo = ClientRepository(db)
    if claims.is_client:
        own = resolve_client_scope(db, claims)
        rows = [own] if own is not None else []
    else:
        rows = repo.list_all()
    return {"clients": [serialize_client(c, counts=repo.counts(c.id)) for c in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_client(body: ClientIn, claims: SessionClaims = RequireStaff, db: Session = Depends(get_db)):
    repo = ClientRepository(db)
    if repo.get_by_email(body.email) is not None:
        raise ConflictError(DUPLICATE_EMAIL)

    fields = body.model_dump(exclude={"password", "name", "email"})
    password_hash = hash_password(body.password) if body.password else None
    try:
        client = repo.create(name=body.name, email=body.email, password_hash=password_hash, **fields)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL) from exc
    log.info("client %s created by %s", client.id, claims.user_id)
    return {"client": serialize_client(client)}


@router.get("/{client_id}")
def get_client(client_id: uuid.UUID, claims: SessionClaims = RequireSession, db: Session = Depends(get_db)):
    client = _get_or_404(ClientRepository(db), client_id)
    ensure_client_access(db, claims, client.id)
    return {"client": serialize_client_detail(client)}


@router.put("/{client_id}")
def update_client(
    client_id: uuid.UUID,
    body: ClientUpdate,
    claims: SessionClaims = RequireStaff,
    db: Session = Depends(get_db),
):
    repo = ClientRepository(db)
    client = _get_or_404(repo, client_id)
    changes = body.changes()
    # colonnes non nulles : un null explicite est ignoré
    for key in ("name", "email"):
        if key in changes and changes[key] is None:
            changes.pop(key)

    email = changes.get("email")
    if email and email != client.email:
        other = repo.get_by_email(email)
        if other is not None and other.id != client.id:
            raise ConflictError(DUPLICATE_EMAIL)

    password = changes.pop("password", None)
    if password:
        changes["password_hash"] = hash_password(password)
    try:
        repo.update(client, **changes)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL) from exc
    return {"client": serialize_client(client)}


@router.delete("/{client_id}")
def delete_client(client_id: uuid.UUID, claims: SessionClaims = RequireAdmin, db: Session = Depends(get_db)):
    repo = ClientRepository(db)
    client = _get_or_404(repo, client_id)
    if repo.count_projects(client.id) > 0:
        raise DependencyError(
            "Cannot delete client with existing projects. Please delete or reassign projects first."
        )
    if repo.count_invoices(client.id) > 0:
        raise DependencyError("Cannot delete client with existing invoices. Please delete invoices first.")
    repo.delete(client)
    db.commit()
    log.info("client %s deleted by %s", client_id, claims.user_id)
    return {"success": True}
