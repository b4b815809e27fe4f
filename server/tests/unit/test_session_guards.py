# server/tests/unit/test_session_guards.py
import uuid

import jwt
import pytest

from creomotion.core.errors import AuthenticationError, AuthorizationError
from creomotion.core.security import create_access_token
from creomotion.presentation.api.deps import (
    SessionClaims,
    ensure_client_access,
    get_current_session,
    require_roles,
    resolve_client_scope,
)

pytestmark = pytest.mark.unit


def _token(**claims):
    base = {"userId": str(uuid.uuid4()), "email": "a@creomotion.com", "role": "ADMIN"}
    base.update(claims)
    return create_access_token(base)


def test_missing_cookie_is_unauthorized():
    with pytest.raises(AuthenticationError) as exc:
        get_current_session(None)
    assert exc.value.message == "Unauthorized"


@pytest.mark.parametrize("token", [
    "garbage",
    jwt.encode({"userId": str(uuid.uuid4()), "email": "a@b.lt", "role": "ADMIN"}, "other-secret", algorithm="HS256"),
])
def test_bad_token_is_invalid(token):
    with pytest.raises(AuthenticationError) as exc:
        get_current_session(token)
    assert exc.value.message == "Invalid token"


def test_expired_token_is_invalid():
    token = create_access_token({"userId": str(uuid.uuid4()), "email": "a@b.lt", "role": "ADMIN"}, expires_seconds=-10)
    with pytest.raises(AuthenticationError) as exc:
        get_current_session(token)
    assert exc.value.message == "Invalid token"


@pytest.mark.parametrize("override", [{"role": "ROOT"}, {"userId": "not-a-uuid"}, {"email": ""}])
def test_malformed_claims_are_invalid(override):
    with pytest.raises(AuthenticationError):
        get_current_session(_token(**override))


def test_valid_token_yields_frozen_claims():
    uid = uuid.uuid4()
    claims = get_current_session(_token(userId=str(uid), role="EDITOR"))
    assert claims == SessionClaims(user_id=uid, email="a@creomotion.com", role="EDITOR")
    with pytest.raises(Exception):
        claims.role = "ADMIN"  # type: ignore[misc]


def test_require_roles():
    gate = require_roles("ADMIN", "EDITOR")
    editor = SessionClaims(uuid.uuid4(), "e@creomotion.com", "EDITOR")
    assert gate(editor) is editor
    with pytest.raises(AuthorizationError) as exc:
        gate(SessionClaims(uuid.uuid4(), "c@acme.lt", "CLIENT"))
    assert exc.value.message == "Forbidden"


def test_client_scope_and_ownership(db, make_client):
    mine = make_client(email="buyer@acme.lt")
    other = make_client(email="other@acme.lt")
    claims = SessionClaims(mine.id, "buyer@acme.lt", "CLIENT")

    assert resolve_client_scope(db, claims).id == mine.id
    ensure_client_access(db, claims, mine.id)
    with pytest.raises(AuthorizationError):
        ensure_client_access(db, claims, other.id)

    staff = SessionClaims(uuid.uuid4(), "admin@creomotion.com", "ADMIN")
    assert resolve_client_scope(db, staff) is None
    ensure_client_access(db, staff, other.id)
