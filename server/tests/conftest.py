# server/tests/conftest.py
"""
Conftest *global* pour toute la suite de tests.

Points clés :
- ENV fixées AVANT tout import de `creomotion` (settings lus à l'import) :
  SQLite in-memory, secret JWT de test, bcrypt rapide, Celery eager, pas de Slack.
- DB SQLite in-memory partagée (StaticPool) + FK activées + Base.create_all.
- `get_db` de l'app surchargé vers cette DB ; purge des tables après chaque test.
- Fabriques : utilisateurs équipe, clients, projets ; helper de login par TestClient.
- `enqueued` : capture les notifications envoyées à Celery (pas d'exécution).
"""

import os
import uuid
from typing import Callable

import pytest

# 1) ENV avant import
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "1")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.pop("SLACK_WEBHOOK", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from creomotion.main import app  # noqa: E402
from creomotion.core.security import hash_password  # noqa: E402
from creomotion.infrastructure.persistence.database.base import Base  # noqa: E402
from creomotion.infrastructure.persistence.database.session import get_db  # noqa: E402
from creomotion.infrastructure.persistence.database.models import Client, Project, User  # noqa: E402


# ============================================================================
# DB SQLite in-memory partagée
# ============================================================================
@pytest.fixture(scope="session")
def engine():
    """
    Engine in-memory **partagé** entre connexions (StaticPool + check_same_thread=False)
    + activation des contraintes FK sur chaque connexion.
    """
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ARG001
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)


@pytest.fixture(scope="session")
def SessionTesting(engine):
    return sessionmaker(bind=engine, future=True, autoflush=True, expire_on_commit=False)


@pytest.fixture(autouse=True)
def _override_get_db(SessionTesting):
    """Override de la dépendance FastAPI `get_db` + purge des tables après le test."""
    def _get_db():
        db = SessionTesting()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.pop(get_db, None)
    with SessionTesting() as s:
        for table in reversed(Base.metadata.sorted_tables):
            s.execute(table.delete())
        s.commit()


@pytest.fixture
def db(SessionTesting):
    s = SessionTesting()
    try:
        yield s
    finally:
        s.close()


# ============================================================================
# Notifications : capture des tâches Celery
# ============================================================================
@pytest.fixture(autouse=True)
def enqueued(monkeypatch) -> list[dict]:
    """
    Remplace `notify.delay` dans le service livrables : on capture les payloads
    au lieu d'exécuter la tâche.
    """
    calls: list[dict] = []

    class _FakeTask:
        def delay(self, payload):
            calls.append(payload)

    import creomotion.application.services.deliverable_service as ds
    monkeypatch.setattr(ds, "notify", _FakeTask())
    return calls


# ============================================================================
# Fabriques
# ============================================================================
@pytest.fixture
def make_user(SessionTesting) -> Callable[..., User]:
    def _make(email: str | None = None, password: str = "secret123", role: str = "ADMIN", name: str | None = "Staff"):
        with SessionTesting() as s:
            user = User(
                email=(email or f"staff+{uuid.uuid4().hex[:6]}@creomotion.com").lower(),
                password_hash=hash_password(password),
                role=role,
                name=name,
            )
            s.add(user)
            s.commit()
            return user
    return _make


@pytest.fixture
def make_client(SessionTesting) -> Callable[..., Client]:
    def _make(email: str | None = None, password: str | None = None, name: str = "Acme"):
        with SessionTesting() as s:
            client = Client(
                name=name,
                email=(email or f"client+{uuid.uuid4().hex[:6]}@acme.lt").lower(),
                password_hash=hash_password(password) if password else None,
            )
            s.add(client)
            s.commit()
            return client
    return _make


@pytest.fixture
def make_project(SessionTesting) -> Callable[..., Project]:
    def _make(client_id: uuid.UUID, name: str = "Brand film", status: str = "DRAFT"):
        with SessionTesting() as s:
            project = Project(name=name, client_id=client_id, status=status)
            s.add(project)
            s.commit()
            return project
    return _make


# ============================================================================
# Clients HTTP
# ============================================================================
@pytest.fixture
def tc() -> TestClient:
    """TestClient anonyme."""
    return TestClient(app)


@pytest.fixture
def login() -> Callable[..., TestClient]:
    """
    Retourne un TestClient authentifié (cookie de session posé par /auth/login
    ou /auth/portal-login).
    """
    def _login(email: str, password: str, *, portal: bool = False) -> TestClient:
        c = TestClient(app)
        path = "/api/v1/auth/portal-login" if portal else "/api/v1/auth/login"
        r = c.post(path, json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return c
    return _login


@pytest.fixture
def admin(make_user, login) -> TestClient:
    make_user(email="admin@creomotion.com", password="admin123", role="ADMIN", name="Admin")
    return login("admin@creomotion.com", "admin123")


@pytest.fixture
def editor(make_user, login) -> TestClient:
    make_user(email="editor@creomotion.com", password="editor123", role="EDITOR", name="Editor")
    return login("editor@creomotion.com", "editor123")


@pytest.fixture
def portal_client(make_client):
    """Fiche client avec accès portail : (Client, mot de passe)."""
    return make_client(email="buyer@acme.lt", password="portal123", name="Acme"), "portal123"


@pytest.fixture
def client_session(portal_client, login) -> TestClient:
    client, password = portal_client
    return login(client.email, password, portal=True)
