from __future__ import annotations
"""
server/creomotion/api/schemas/deliverable.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Pydantic schemas pour les livrables.

`status` reste une chaîne libre dans DeliverableUpdate : la règle CLIENT
(403) passe avant la validation du statut (400), côté service.
"""

import uuid

from pydantic import Field

from creomotion.api.schemas.base import CamelModel


class DeliverableIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    project_id: uuid.UUID
    description: str | None = None
    file_url: str | None = None
    thumbnail_url: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    mime_type: str | None = None
    google_drive_id: str | None = None


class DeliverableUpdate(CamelModel):
    status: str | None = None
    comment: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    file_url: str | None = None
    thumbnail_url: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    mime_type: str | None = None
    google_drive_id: str | None = None


class ReviewIn(CamelModel):
    notes: str | None = None
