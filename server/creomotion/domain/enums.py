# server/creomotion/domain/enums.py

from __future__ import annotations
"""
Vocabulaire métier : rôles et statuts.

Les colonnes sont stockées en String ; ces enums servent de référence pour
la validation des payloads (schemas) et les règles des services.
"""

import enum


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    CLIENT = "CLIENT"


STAFF_ROLES = (Role.ADMIN.value, Role.EDITOR.value)


class ProjectStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    IN_PROGRESS = "IN_PROGRESS"
    IN_REVIEW = "IN_REVIEW"
    REVIEW = "REVIEW"
    APPROVED = "APPROVED"
    COMPLETED = "COMPLETED"
    DELIVERED = "DELIVERED"
    ARCHIVED = "ARCHIVED"
    CANCELLED = "CANCELLED"


class TaskStatus(str, enum.Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    REVIEW = "REVIEW"
    DONE = "DONE"
    BLOCKED = "BLOCKED"


class TaskCategory(str, enum.Enum):
    PRE_PRODUCTION = "PRE_PRODUCTION"
    SHOOTING = "SHOOTING"
    EDITING = "EDITING"
    MOTION_GRAPHICS = "MOTION_GRAPHICS"
    COLOR = "COLOR"
    SOUND = "SOUND"
    VFX = "VFX"
    DELIVERY = "DELIVERY"
    REVISION = "REVISION"
    OTHER = "OTHER"


class DeliverableStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    DELIVERED = "DELIVERED"
    REJECTED = "REJECTED"


# Seuls statuts qu'un CLIENT peut poser sur un livrable
CLIENT_DECISIONS = (DeliverableStatus.APPROVED.value, DeliverableStatus.REJECTED.value)


class ReviewDecision(str, enum.Enum):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"


class ReviewerType(str, enum.Enum):
    USER = "USER"
    CLIENT = "CLIENT"


class InvoiceStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    NOT_SENT = "NOT_SENT"
    SENT = "SENT"
    VIEWED = "VIEWED"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


def values(enum_cls: type[enum.Enum]) -> list[str]:
    return [m.value for m in enum_cls]
