from __future__ import annotations
"""server/creomotion/infrastructure/persistence/database/models/__init__.py
~~~~~~~~~~~~~~~~~~~~~~~~
Modèles ORM (register for Alembic).
"""

from .user import User
from .client import Client
from .project import Project
from .task import Task
from .time_entry import TimeEntry
from .deliverable import Deliverable, DeliverableReview
from .invoice import Invoice, InvoiceLineItem, InvoiceSettings

__all__ = [
    "User", "Client", "Project", "Task", "TimeEntry",
    "Deliverable", "DeliverableReview",
    "Invoice", "InvoiceLineItem", "InvoiceSettings",
]
