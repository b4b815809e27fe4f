# server/creomotion/api/v1/endpoints/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from creomotion.api.schemas.auth import LoginIn
from creomotion.application.services.identity_service import (
    authenticate,
    public_identity,
    resolve_principal_by_id,
)
from creomotion.core.errors import NotFoundError
from creomotion.core.security import clear_session_cookie, set_session_cookie
from creomotion.infrastructure.persistence.database.session import get_db
from creomotion.presentation.api.deps import SessionClaims, get_current_session

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    principal, token = authenticate(db, body.email, body.password)
    set_session_cookie(response, token)
    return {"user": public_identity(principal)}


@router.post("/portal-login")
def portal_login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    # 403 pour un compte équipe : le portail est réservé aux clients
    principal, token = authenticate(db, body.email, body.password, portal=True)
    set_session_cookie(response, token)
    return {"user": public_identity(principal)}


@router.get("/me")
def me(claims: SessionClaims = Depends(get_current_session), db: Session = Depends(get_db)):
    principal = resolve_principal_by_id(db, claims.user_id, claims.role)
    if principal is None:
        raise NotFoundError("User not found")
    return {"user": public_identity(principal)}


@router.post("/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return {"success": True}
