from __future__ import annotations
"""
server/creomotion/api/schemas/time_entry.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Pydantic schemas pour les saisies de temps (`duration` en secondes).
"""

import datetime as dt
import uuid

from pydantic import Field, field_validator

from creomotion.api.schemas.base import CamelModel
from creomotion.core.utils.datetime import as_utc


class TimeEntryIn(CamelModel):
    project_id: uuid.UUID
    task_id: uuid.UUID | None = None
    description: str | None = None
    duration: int = Field(..., ge=0)
    date: dt.datetime
    billable: bool = True
    hourly_rate: float | None = Field(default=None, ge=0)

    @field_validator("date")
    @classmethod
    def to_utc(cls, v: dt.datetime) -> dt.datetime:
        return as_utc(v)


class TimeEntryUpdate(CamelModel):
    project_id: uuid.UUID | None = None
    task_id: uuid.UUID | None = None
    description: str | None = None
    duration: int | None = Field(default=None, ge=0)
    date: dt.datetime | None = None
    billable: bool | None = None
    hourly_rate: float | None = Field(default=None, ge=0)

    @field_validator("date")
    @classmethod
    def to_utc(cls, v: dt.datetime | None) -> dt.datetime | None:
        return as_utc(v)
