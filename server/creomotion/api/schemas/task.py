from __future__ import annotations
"""
server/creomotion/api/schemas/task.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Pydantic schemas pour les tâches de projet.

`order` absent à la création : placé en fin de liste par l'endpoint.
"""

from pydantic import Field

from creomotion.api.schemas.base import CamelModel
from creomotion.domain.enums import TaskCategory, TaskStatus


class TaskIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: TaskCategory = TaskCategory.OTHER
    status: TaskStatus = TaskStatus.TODO
    estimated_hours: float | None = Field(default=None, ge=0)
    order: int | None = Field(default=None, ge=0)


class TaskUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: TaskCategory | None = None
    status: TaskStatus | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    order: int | None = Field(default=None, ge=0)
