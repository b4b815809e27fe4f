from __future__ import annotations
"""
server/creomotion/infrastructure/persistence/database/base.py

Base ORM SQLAlchemy 2.x.

Le `from creomotion.infrastructure.persistence.database.models import *`
ci-dessous remplit Base.metadata avec TOUTES les tables : un
`Base.metadata.create_all(bind=engine)` (SQLite en tests) crée le schéma complet.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base declarative pour tous les modèles."""
    pass


# Effet de bord voulu : en important ce package on enregistre toutes les tables.
from creomotion.infrastructure.persistence.database.models import *  # noqa: F403,F401,E402
