# server/tests/unit/test_deliverable_versioning.py
"""
Versionnement des livrables : recalcul après collision sur la contrainte unique.
"""
import pytest

from creomotion.application.services import deliverable_service
from creomotion.core.errors import AuthorizationError, ConflictError
from creomotion.infrastructure.persistence.repositories.deliverable_repository import DeliverableRepository

pytestmark = pytest.mark.unit


@pytest.fixture
def project(make_client, make_project):
    return make_project(make_client().id)


def test_first_version_is_one(db, project):
    d = deliverable_service.create_deliverable(db, project_id=project.id, name="Teaser")
    assert d.version == 1
    assert d.status == "DRAFT"


def test_stale_read_is_retried(db, project, monkeypatch):
    deliverable_service.create_deliverable(db, project_id=project.id, name="Teaser")

    real = DeliverableRepository.max_version
    calls = []

    def stale_once(self, project_id, name):
        calls.append(name)
        # premier appel : lecture "en retard" comme si une création concurrente venait d'avoir lieu
        return None if len(calls) == 1 else real(self, project_id, name)

    monkeypatch.setattr(DeliverableRepository, "max_version", stale_once)
    d = deliverable_service.create_deliverable(db, project_id=project.id, name="Teaser")
    assert d.version == 2
    assert len(calls) == 2


def test_retries_are_bounded(db, project, monkeypatch):
    deliverable_service.create_deliverable(db, project_id=project.id, name="Teaser")
    monkeypatch.setattr(DeliverableRepository, "max_version", lambda self, project_id, name: None)
    with pytest.raises(ConflictError):
        deliverable_service.create_deliverable(db, project_id=project.id, name="Teaser")
    assert DeliverableRepository(db).list(project_id=project.id)[0].version == 1


def test_append_comment_format():
    line = deliverable_service.comment_line("ok")
    assert line.startswith("[Comment ")
    assert line.endswith(" UTC]: ok")
    assert deliverable_service.append_comment(None, "ok") == line
    assert deliverable_service.append_comment("Notes", "ok") == f"Notes\n\n{line}"


@pytest.mark.parametrize("changes", [
    {"status": "APPROVED"},
    {"status": "REJECTED", "comment": "again"},
    {"comment": "only a note"},
])
def test_client_update_allowed(changes):
    deliverable_service.check_client_update(changes)


@pytest.mark.parametrize("changes", [
    {"status": "DELIVERED"},
    {"name": "x"},
    {"status": "APPROVED", "file_url": "https://x"},
])
def test_client_update_refused(changes):
    with pytest.raises(AuthorizationError):
        deliverable_service.check_client_update(changes)
