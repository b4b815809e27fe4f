from __future__ import annotations
"""
server/creomotion/presentation/api/deps.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Dépendances communes côté "presentation" (API).

Contenu :
- get_current_session : lit le cookie de session, vérifie le JWT, rend des claims figées.
- require_roles(*roles) : compose la précédente et filtre sur le rôle.
- resolve_client_scope / ensure_client_access : filtre de propriété pour les CLIENT.

Conventions :
- 401 "Unauthorized" si cookie manquant
- 401 "Invalid token" si signature/expiration/claims invalides
- 403 "Forbidden" si rôle non autorisé ou ressource d'un autre client

Aucun état : les dépendances sont réentrantes entre requêtes concurrentes.
"""

import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Cookie, Depends
from sqlalchemy.orm import Session

from creomotion.core.errors import AuthenticationError, AuthorizationError
from creomotion.core.security import SESSION_COOKIE, decode_token
from creomotion.domain.enums import Role
from creomotion.infrastructure.persistence.database.models.client import Client
from creomotion.infrastructure.persistence.database.session import get_db
from creomotion.infrastructure.persistence.repositories.client_repository import ClientRepository


@dataclass(frozen=True)
class SessionClaims:
    user_id: uuid.UUID
    email: str
    role: str

    @property
    def is_client(self) -> bool:
        return self.role == Role.CLIENT.value


def get_current_session(
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> SessionClaims:
    """
    Claims de la session courante.

    Étapes :
    1) Vérifie présence cookie
    2) Décode + vérifie signature/exp
    3) Contrôle les claims attendues (userId, email, role)

    Raises:
        AuthenticationError(401): "Unauthorized" sans cookie, "Invalid token" sinon
    """
    if not session_token:
        raise AuthenticationError("Unauthorized")

    claims = decode_token(session_token)
    if not claims:
        raise AuthenticationError("Invalid token")

    user_id, email, role = claims.get("userId"), claims.get("email"), claims.get("role")
    if not user_id or not email or role not in {r.value for r in Role}:
        raise AuthenticationError("Invalid token")
    try:
        parsed = uuid.UUID(str(user_id))
    except ValueError:
        raise AuthenticationError("Invalid token")

    return SessionClaims(user_id=parsed, email=str(email), role=str(role))


def require_roles(*roles: str) -> Callable[..., SessionClaims]:
    """
    Usage:
        claims: SessionClaims = Depends(require_roles("ADMIN", "EDITOR"))
    """
    allowed = frozenset(r.value if isinstance(r, Role) else r for r in roles)

    def _dependency(claims: SessionClaims = Depends(get_current_session)) -> SessionClaims:
        if claims.role not in allowed:
            raise AuthorizationError("Forbidden")
        return claims

    return _dependency


def resolve_client_scope(db: Session, claims: SessionClaims) -> Optional[Client]:
    """Pour un CLIENT : la fiche clients de même email (None si absente). None pour l'équipe."""
    if not claims.is_client:
        return None
    return ClientRepository(db).get_by_email(claims.email)


def ensure_client_access(db: Session, claims: SessionClaims, client_id: uuid.UUID) -> None:
    """403 si l'appelant est un CLIENT et que `client_id` n'est pas le sien."""
    if not claims.is_client:
        return
    scope = resolve_client_scope(db, claims)
    if scope is None or scope.id != client_id:
        raise AuthorizationError("Forbidden")


# raccourcis utilisés par les routeurs
RequireSession = Depends(get_current_session)
RequireStaff = Depends(require_roles(Role.ADMIN, Role.EDITOR))
RequireAdmin = Depends(require_roles(Role.ADMIN))
