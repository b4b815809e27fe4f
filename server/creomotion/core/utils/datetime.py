# coding: utf-8
# server/creomotion/core/utils/datetime.py
"""server/creomotion/core/utils/datetime.py
~~~~~~~~~~~~~~~~~~~~~~~~
Utilitaires pour la gestion des dates et heures.
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Horodatage UTC timezone-aware."""
    return datetime.now(timezone.utc)


def as_utc(d: Optional[datetime]) -> Optional[datetime]:
    """Retourne un datetime timezone-aware en UTC (tolère None et les dates naïves)."""
    if d is None:
        return None
    if d.tzinfo is None:
        return d.replace(tzinfo=timezone.utc)
    return d.astimezone(timezone.utc)


def isoformat(d: Optional[datetime]) -> Optional[str]:
    """ISO 8601 UTC, ou None si absent (SQLite rend des dates naïves)."""
    d = as_utc(d)
    return d.isoformat() if d else None
