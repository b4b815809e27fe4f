from __future__ import annotations
"""server/creomotion/application/services/identity_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
Résolution d'identité et authentification.

Un principal est soit un membre de l'équipe (table users), soit un contact
client (table clients). L'email est la clé de recherche commune :
users est consulté d'abord, une ligne users masque donc une ligne clients
de même email.

Les deux variantes de login (staff / portail) partagent `resolve_principal`
et `authenticate` ; seule la garde portail diffère.
"""
import logging
from dataclasses import dataclass
from typing import Union
from uuid import UUID

from sqlalchemy.orm import Session

from creomotion.core.errors import AuthenticationError, AuthorizationError
from creomotion.core.security import create_access_token, verify_password
from creomotion.domain.enums import Role
from creomotion.infrastructure.persistence.database.models.client import Client
from creomotion.infrastructure.persistence.database.models.user import User
from creomotion.infrastructure.persistence.repositories.client_repository import ClientRepository
from creomotion.infrastructure.persistence.repositories.user_repository import UserRepository

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
PORTAL_STAFF_DENIED = "Access denied. Client access only."


@dataclass(frozen=True)
class StaffUser:
    user: User
    kind: str = "user"

    @property
    def id(self) -> UUID:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def name(self) -> str | None:
        return self.user.name

    @property
    def role(self) -> str:
        return self.user.role

    @property
    def password_hash(self) -> str | None:
        return self.user.password_hash


@dataclass(frozen=True)
class ClientContact:
    client: Client
    kind: str = "client"

    @property
    def id(self) -> UUID:
        return self.client.id

    @property
    def email(self) -> str:
        return self.client.email

    @property
    def name(self) -> str | None:
        return self.client.name

    @property
    def role(self) -> str:
        return Role.CLIENT.value

    @property
    def password_hash(self) -> str | None:
        return self.client.password_hash


Principal = Union[StaffUser, ClientContact]


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def resolve_principal(db: Session, email: str) -> Principal | None:
    """users d'abord, puis clients ; None si aucun."""
    key = normalize_email(email)
    if not key:
        return None
    user = UserRepository(db).get_by_email(key)
    if user is not None:
        return StaffUser(user)
    client = ClientRepository(db).get_by_email(key)
    if client is not None:
        return ClientContact(client)
    return None


def resolve_principal_by_id(db: Session, principal_id: UUID, role: str) -> Principal | None:
    """
    Retrouve le principal d'un jeton : un jeton CLIENT peut venir d'une ligne
    clients ou d'un compte users de rôle CLIENT, on essaie donc les deux.
    """
    users, clients = UserRepository(db), ClientRepository(db)
    if role == Role.CLIENT.value:
        client = clients.get(principal_id)
        if client is not None:
            return ClientContact(client)
    user = users.get(principal_id)
    if user is not None:
        return StaffUser(user)
    client = clients.get(principal_id)
    return ClientContact(client) if client is not None else None


def session_claims(principal: Principal) -> dict[str, str]:
    return {"userId": str(principal.id), "email": principal.email, "role": principal.role}


def public_identity(principal: Principal) -> dict:
    return {
        "id": str(principal.id),
        "email": principal.email,
        "name": principal.name,
        "role": principal.role,
    }


def authenticate(db: Session, email: str, password: str, *, portal: bool = False) -> tuple[Principal, str]:
    """
    Vérifie les identifiants et émet le jeton de session.

    - identité inconnue, mot de passe portail absent ou faux : 401 uniforme
    - portail + compte users non CLIENT : 403 (contrôlé avant le mot de passe)
    """
    principal = resolve_principal(db, email)
    if principal is None:
        log.info("login refused: unknown identity (portal=%s)", portal)
        raise AuthenticationError(INVALID_CREDENTIALS)

    if isinstance(principal, StaffUser) and portal and principal.role != Role.CLIENT.value:
        log.info("portal login refused for staff account %s", principal.id)
        raise AuthorizationError(PORTAL_STAFF_DENIED)

    if not principal.password_hash:
        log.info("login refused: no portal password for %s", principal.id)
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not verify_password(password, principal.password_hash):
        log.info("login refused: bad password for %s", principal.id)
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = create_access_token(session_claims(principal))
    log.info("login ok: %s %s (portal=%s)", principal.kind, principal.id, portal)
    return principal, token
