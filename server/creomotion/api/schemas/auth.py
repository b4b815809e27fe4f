from __future__ import annotations
"""
server/creomotion/api/schemas/auth.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Payload de login (staff et portail).

`email` reste une chaîne libre : seul le lookup en base décide, un domaine
interne (.local, .test) doit pouvoir se connecter.
"""

from pydantic import Field, field_validator

from creomotion.api.schemas.base import CamelModel
from creomotion.application.services.identity_service import normalize_email


class LoginIn(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize(cls, v: str) -> str:
        key = normalize_email(v)
        if not key:
            raise ValueError("email is required")
        return key
