# server/tests/migrations/test_0001_initial.py
"""
Révision 0001_initial en mode offline (SQL généré, sans base) : toutes les
tables des modèles ORM sont créées, la contrainte de version est présente.
"""
import io
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config

from creomotion.infrastructure.persistence.database.base import Base

pytestmark = pytest.mark.unit

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def _sql(command_fn, revision: str) -> str:
    buf = io.StringIO()
    cfg = Config(str(ALEMBIC_INI), output_buffer=buf)
    command_fn(cfg, revision, sql=True)
    return buf.getvalue()


def test_upgrade_creates_every_model_table():
    sql = _sql(command.upgrade, "0001_initial")
    for table in Base.metadata.tables:
        assert f"CREATE TABLE {table} " in sql, table


def test_upgrade_carries_deliverable_constraints():
    sql = _sql(command.upgrade, "0001_initial")
    assert "uq_deliverables_project_name_version" in sql
    assert "ck_deliverables_version_positive" in sql
    assert "ix_invoices_invoice_number" in sql


def test_downgrade_drops_tables():
    sql = _sql(command.downgrade, "0001_initial:base")
    assert "DROP TABLE invoice_line_items" in sql
    assert "DROP TABLE users" in sql
