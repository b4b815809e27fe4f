from __future__ import annotations
"""server/creomotion/infrastructure/persistence/repositories/user_repository.py
~~~~~~~~~~~~~~~~~~~~~~~~
Accès aux utilisateurs (équipe). Pas de commit ici.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from creomotion.infrastructure.persistence.database.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: UUID) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalar(select(User).where(User.email == (email or "").strip().lower()))

    def create(self, *, email: str, password_hash: str, role: str, name: str | None = None) -> User:
        user = User(email=email.strip().lower(), password_hash=password_hash, role=role, name=name)
        self.db.add(user)
        self.db.flush()
        return user
