# server/tests/unit/test_database_session.py
import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from creomotion.infrastructure.persistence.database.session import build_engine

pytestmark = pytest.mark.unit


def test_sqlite_memory_engine_is_shared_and_enforces_fk():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    assert isinstance(engine.pool, StaticPool)
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
    engine.dispose()


def test_sqlite_file_engine_uses_default_pool(tmp_path):
    engine = build_engine(f"sqlite+pysqlite:///{tmp_path / 'creo.db'}")
    assert not isinstance(engine.pool, StaticPool)
    engine.dispose()
