from __future__ import annotations
"""server/creomotion/core/security.py
~~~~~~~~~~~~~~~~~~~~~~~~
Primitives de sécurité : hash bcrypt, JWT de session, cookie HttpOnly.

- Le hash utilise bcrypt (coût `BCRYPT_ROUNDS`, 12 par défaut).
- Le JWT est signé HS256 avec `JWT_SECRET` ; `iat`/`exp` ajoutés ici.
- `decode_token` ne lève jamais : None si signature/expiration invalide.
"""
import datetime as dt
import logging
from typing import Any

import jwt
from fastapi import Response
from passlib.context import CryptContext

from creomotion.core.config import settings

log = logging.getLogger(__name__)

SESSION_COOKIE = settings.SESSION_COOKIE_NAME

_pwd = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    try:
        return _pwd.verify(password, password_hash)
    except (ValueError, TypeError):
        # hash illisible (ex: valeur non bcrypt en base)
        return False


def create_access_token(claims: dict[str, Any], expires_seconds: int | None = None) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    ttl = settings.session_max_age if expires_seconds is None else int(expires_seconds)
    payload = dict(claims)
    payload["iat"] = int(now.timestamp())
    payload["exp"] = int((now + dt.timedelta(seconds=ttl)).timestamp())
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str | None) -> dict[str, Any] | None:
    if not token:
        return None
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        log.debug("session token expired")
        return None
    except jwt.InvalidTokenError:
        return None


def cookie_kwargs(max_age: int | None = None) -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "lax",
        "path": "/",
        "max_age": settings.session_max_age if max_age is None else int(max_age),
    }


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(SESSION_COOKIE, token, **cookie_kwargs())


def clear_session_cookie(response: Response) -> None:
    # delete_cookie remet un Max-Age nul (path doit matcher)
    response.delete_cookie(
        SESSION_COOKIE,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
