from __future__ import annotations
"""
server/creomotion/api/schemas/project.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Pydantic schemas pour les projets.
"""

import datetime as dt
import uuid

from pydantic import Field

from creomotion.api.schemas.base import CamelModel
from creomotion.domain.enums import ProjectStatus


class ProjectIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    client_id: uuid.UUID
    description: str | None = None
    status: ProjectStatus = ProjectStatus.DRAFT
    budget: float | None = Field(default=None, ge=0)
    deadline: dt.datetime | None = None


class ProjectUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    client_id: uuid.UUID | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    budget: float | None = Field(default=None, ge=0)
    deadline: dt.datetime | None = None
