# server/tests/integration/test_auth_endpoints.py
"""
Tests d'intégration auth (login → me → logout) via TestClient.
"""
import pytest

pytestmark = pytest.mark.integration

LOGIN = "/api/v1/auth/login"
PORTAL = "/api/v1/auth/portal-login"
ME = "/api/v1/auth/me"


def test_admin_login_sets_session_cookie(tc, make_user):
    make_user(email="admin@creomotion.com", password="admin123", role="ADMIN", name="Admin")
    r = tc.post(LOGIN, json={"email": "admin@creomotion.com", "password": "admin123"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["user"]["role"] == "ADMIN"
    assert body["user"]["email"] == "admin@creomotion.com"
    assert set(body["user"]) == {"id", "email", "name", "role"}

    cookie = r.headers["set-cookie"]
    assert cookie.startswith("auth-token=")
    assert "HttpOnly" in cookie
    assert "Max-Age=604800" in cookie
    assert "Path=/" in cookie
    assert "samesite=lax" in cookie.lower()
    assert "Secure" not in cookie


def test_login_email_is_case_insensitive(tc, make_user):
    make_user(email="admin@creomotion.com", password="admin123")
    r = tc.post(LOGIN, json={"email": "Admin@CreoMotion.com", "password": "admin123"})
    assert r.status_code == 200


@pytest.mark.parametrize("email,password", [
    ("admin@creomotion.com", "nope"),
    ("ghost@creomotion.com", "admin123"),
])
def test_login_failures_share_one_message(tc, make_user, email, password):
    make_user(email="admin@creomotion.com", password="admin123")
    r = tc.post(LOGIN, json={"email": email, "password": password})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}
    assert "set-cookie" not in r.headers


@pytest.mark.parametrize("payload", [
    {"email": "admin@creomotion.com"},
    {"password": "admin123"},
    {"email": "", "password": "admin123"},
    {},
])
def test_login_bad_payload_is_400(tc, payload):
    r = tc.post(LOGIN, json=payload)
    assert r.status_code == 400
    assert isinstance(r.json()["error"], str)


def test_login_accepts_internal_domain_email(tc, make_user):
    make_user(email="render@studio.test", password="farm123", role="EDITOR")
    r = tc.post(LOGIN, json={"email": "Render@Studio.test", "password": "farm123"})
    assert r.status_code == 200, r.text
    assert r.json()["user"]["email"] == "render@studio.test"


def test_unknown_malformed_email_is_plain_401(tc):
    r = tc.post(LOGIN, json={"email": "not-an-email", "password": "admin123"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


def test_client_contact_without_password_cannot_log_in(tc, make_client):
    make_client(email="noportal@acme.lt", password=None)
    r = tc.post(PORTAL, json={"email": "noportal@acme.lt", "password": "whatever"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


def test_portal_login_rejects_staff(tc, make_user):
    make_user(email="editor@creomotion.com", password="editor123", role="EDITOR")
    r = tc.post(PORTAL, json={"email": "editor@creomotion.com", "password": "editor123"})
    assert r.status_code == 403
    assert r.json() == {"error": "Access denied. Client access only."}
    assert tc.post(LOGIN, json={"email": "editor@creomotion.com", "password": "editor123"}).status_code == 200


def test_portal_login_for_client(tc, portal_client):
    client, password = portal_client
    r = tc.post(PORTAL, json={"email": client.email, "password": password})
    assert r.status_code == 200
    assert r.json()["user"] == {"id": str(client.id), "email": client.email, "name": client.name, "role": "CLIENT"}


def test_user_row_shadows_client_row(tc, make_user, make_client):
    make_client(email="dual@creomotion.com", password="client-pw")
    user = make_user(email="dual@creomotion.com", password="staff-pw", role="EDITOR")
    assert tc.post(LOGIN, json={"email": "dual@creomotion.com", "password": "client-pw"}).status_code == 401
    r = tc.post(LOGIN, json={"email": "dual@creomotion.com", "password": "staff-pw"})
    assert r.json()["user"]["id"] == str(user.id)


def test_me_requires_session(tc):
    r = tc.get(ME)
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_me_with_tampered_cookie(tc):
    r = tc.get(ME, headers={"Cookie": "auth-token=not-a-jwt"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid token"}


def test_me_returns_identity(admin, client_session, portal_client):
    assert admin.get(ME).json()["user"]["role"] == "ADMIN"
    client, _ = portal_client
    me = client_session.get(ME).json()["user"]
    assert me["id"] == str(client.id)
    assert me["role"] == "CLIENT"


def test_logout_clears_cookie(admin):
    r = admin.post("/api/v1/auth/logout")
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert "Max-Age=0" in r.headers["set-cookie"]


def test_health(tc):
    assert tc.get("/api/v1/health").json() == {"status": "ok"}
