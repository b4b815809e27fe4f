from __future__ import annotations

"""
Repository d'accès aux clients.

Principes:
- Pas de commit() ici : le code appelant contrôle la transaction (unit of work).
- Les emails sont normalisés en minuscules à l'écriture comme à la lecture.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from creomotion.infrastructure.persistence.database.models.client import Client
from creomotion.infrastructure.persistence.database.models.invoice import Invoice
from creomotion.infrastructure.persistence.database.models.project import Project


class ClientRepository:
    """Accès et manipulation des fiches client."""

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------
    # Lectures
    # ---------------------------

    def get(self, client_id: UUID) -> Optional[Client]:
        return self.db.get(Client, client_id)

    def get_by_email(self, email: str) -> Optional[Client]:
        return self.db.scalar(select(Client).where(Client.email == (email or "").strip().lower()))

    def list_all(self) -> list[Client]:
        return list(self.db.scalars(select(Client).order_by(Client.name)))

    def count_projects(self, client_id: UUID) -> int:
        return int(self.db.scalar(select(func.count(Project.id)).where(Project.client_id == client_id)) or 0)

    def count_invoices(self, client_id: UUID) -> int:
        return int(self.db.scalar(select(func.count(Invoice.id)).where(Invoice.client_id == client_id)) or 0)

    def counts(self, client_id: UUID) -> dict[str, int]:
        """`_count` exposé par l'API : {projects, invoices}."""
        return {
            "projects": self.count_projects(client_id),
            "invoices": self.count_invoices(client_id),
        }

    # ---------------------------
    # Écritures
    # ---------------------------

    def create(self, *, name: str, email: str, password_hash: str | None = None, **fields: Any) -> Client:
        client = Client(name=name, email=email.strip().lower(), password_hash=password_hash, **fields)
        self.db.add(client)
        self.db.flush()
        return client

    def update(self, client: Client, **fields: Any) -> Client:
        if "email" in fields and fields["email"] is not None:
            fields["email"] = fields["email"].strip().lower()
        for key, value in fields.items():
            setattr(client, key, value)
        self.db.flush()
        return client

    def delete(self, client: Client) -> None:
        self.db.delete(client)
        self.db.flush()
