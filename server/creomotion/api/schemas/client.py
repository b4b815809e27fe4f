from __future__ import annotations
"""
server/creomotion/api/schemas/client.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Pydantic schemas pour les fiches client.

- `email` normalisé en minuscules.
- `password` optionnel : s'il est fourni, ouvre (ou réinitialise) l'accès portail.
"""

from pydantic import EmailStr, Field, field_validator

from creomotion.api.schemas.base import CamelModel


class ClientIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str | None = Field(default=None, min_length=1)
    company: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    company_code: str | None = None
    vat_code: str | None = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class ClientUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=1)
    company: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    company_code: str | None = None
    vat_code: str | None = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return v.strip().lower() if v else v
