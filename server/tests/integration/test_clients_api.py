# server/tests/integration/test_clients_api.py
import uuid

import pytest

from creomotion.infrastructure.persistence.database.models.invoice import Invoice

pytestmark = pytest.mark.integration

BASE = "/api/v1/clients"


def _create(c, **overrides):
    payload = {"name": "Northwind", "email": "hello@northwind.lt"}
    payload.update(overrides)
    return c.post(BASE, json=payload)


def test_requires_session(tc):
    assert tc.get(BASE).status_code == 401


def test_create_client(admin):
    r = _create(admin, email="Hello@Northwind.LT", companyCode="30412", city="Vilnius")
    assert r.status_code == 201, r.text
    client = r.json()["client"]
    assert client["email"] == "hello@northwind.lt"
    assert client["companyCode"] == "30412"
    assert client["hasPortalAccess"] is False
    assert "passwordHash" not in client


def test_create_requires_name_and_email(admin):
    assert admin.post(BASE, json={"name": "No mail"}).status_code == 400
    assert admin.post(BASE, json={"email": "a@northwind.lt"}).status_code == 400


def test_duplicate_email_conflicts(editor):
    assert _create(editor).status_code == 201
    r = _create(editor, name="Other", email="HELLO@northwind.lt")
    assert r.status_code == 409
    assert r.json() == {"error": "Client with this email already exists"}


def test_client_role_cannot_create(client_session):
    r = _create(client_session)
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden"}


def test_password_provisions_portal_access(admin, tc):
    r = _create(admin, password="portal-pw")
    assert r.json()["client"]["hasPortalAccess"] is True
    login = tc.post("/api/v1/auth/portal-login", json={"email": "hello@northwind.lt", "password": "portal-pw"})
    assert login.status_code == 200


def test_list_for_staff_has_counts(admin, make_client, make_project):
    b = make_client(name="Beta", email="b@beta.lt")
    make_client(name="Alpha", email="a@alpha.lt")
    make_project(b.id)
    clients = admin.get(BASE).json()["clients"]
    assert [c["name"] for c in clients] == ["Alpha", "Beta"]
    assert clients[1]["_count"] == {"projects": 1, "invoices": 0}


def test_list_for_client_is_own_row_only(client_session, portal_client, make_client):
    make_client(email="someone@else.lt")
    clients = client_session.get(BASE).json()["clients"]
    assert [c["id"] for c in clients] == [str(portal_client[0].id)]


def test_get_client_detail_and_ownership(admin, client_session, portal_client, make_client, make_project):
    mine, _ = portal_client
    make_project(mine.id, name="Mine")
    other = make_client(email="other@else.lt")

    detail = client_session.get(f"{BASE}/{mine.id}").json()["client"]
    assert [p["name"] for p in detail["projects"]] == ["Mine"]
    assert detail["invoices"] == []

    assert client_session.get(f"{BASE}/{other.id}").status_code == 403
    assert admin.get(f"{BASE}/{other.id}").status_code == 200
    r = admin.get(f"{BASE}/{uuid.uuid4()}")
    assert r.status_code == 404
    assert r.json() == {"error": "Client not found"}


def test_update_client(admin, make_client):
    a = make_client(email="a@alpha.lt")
    make_client(email="b@beta.lt")
    r = admin.put(f"{BASE}/{a.id}", json={"phone": "+37060000000"})
    assert r.status_code == 200
    assert r.json()["client"]["phone"] == "+37060000000"
    assert r.json()["client"]["email"] == "a@alpha.lt"

    r = admin.put(f"{BASE}/{a.id}", json={"email": "B@beta.lt"})
    assert r.status_code == 409


def test_update_ignores_explicit_null_for_required_columns(admin, make_client):
    a = make_client(email="a@alpha.lt", name="Alpha")
    r = admin.put(f"{BASE}/{a.id}", json={"name": None, "email": None, "city": "Vilnius"})
    assert r.status_code == 200, r.text
    client = r.json()["client"]
    assert client["name"] == "Alpha"
    assert client["email"] == "a@alpha.lt"
    assert client["city"] == "Vilnius"


def test_delete_rules(admin, editor, make_client, make_project):
    busy = make_client(email="busy@acme.lt")
    make_project(busy.id)
    idle = make_client(email="idle@acme.lt")

    assert editor.delete(f"{BASE}/{idle.id}").status_code == 403

    r = admin.delete(f"{BASE}/{busy.id}")
    assert r.status_code == 400
    assert r.json()["error"].startswith("Cannot delete client with existing projects")

    r = admin.delete(f"{BASE}/{idle.id}")
    assert r.json() == {"success": True}
    assert admin.get(f"{BASE}/{idle.id}").status_code == 404
    assert admin.delete(f"{BASE}/{idle.id}").status_code == 404


def test_delete_blocked_by_invoices(admin, make_client, make_project, SessionTesting):
    """Facture héritée rattachée au client sans projet à lui."""
    owner = make_client(email="owner@acme.lt")
    project = make_project(owner.id)
    billed = make_client(email="billed@acme.lt")
    with SessionTesting() as s:
        s.add(Invoice(invoice_number="LEGACY-1", project_id=project.id, client_id=billed.id, amount=100))
        s.commit()

    r = admin.delete(f"{BASE}/{billed.id}")
    assert r.status_code == 400
    assert r.json() == {"error": "Cannot delete client with existing invoices. Please delete invoices first."}
    assert admin.get(f"{BASE}/{billed.id}").status_code == 200
