# server/tests/unit/test_error_handlers.py
"""
Handlers globaux : toutes les erreurs sortent en `{"error": ...}`.
Mini-app dédiée pour ne pas dépendre des routes métier.
"""
import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from creomotion.core.errors import (
    AuthenticationError,
    ConflictError,
    DependencyError,
    InternalError,
    NotFoundError,
)
from creomotion.core.middleware import install_global_middleware

pytestmark = pytest.mark.unit


class _Body(BaseModel):
    name: str
    count: int


def _app() -> FastAPI:
    app = FastAPI()
    install_global_middleware(app)

    @app.get("/app-error/{kind}")
    def app_error(kind: str):
        raise {
            "401": AuthenticationError(),
            "404": NotFoundError("Thing not found"),
            "409": ConflictError("Already there"),
            "400": DependencyError("Has children"),
            "500": InternalError(),
        }[kind]

    @app.get("/http-error")
    def http_error():
        raise HTTPException(status_code=418, detail="teapot")

    @app.post("/body")
    def body(payload: _Body):
        return payload.model_dump()

    @app.get("/boom")
    def boom():
        raise RuntimeError("secret internals")

    return app


@pytest.fixture
def client():
    return TestClient(_app(), raise_server_exceptions=False)


@pytest.mark.parametrize("kind,message", [
    ("401", "Unauthorized"),
    ("404", "Thing not found"),
    ("409", "Already there"),
    ("400", "Has children"),
    ("500", "Internal server error"),
])
def test_app_errors_map_to_status_and_message(client, kind, message):
    r = client.get(f"/app-error/{kind}")
    assert r.status_code == int(kind)
    assert r.json() == {"error": message}


def test_http_exception_detail(client):
    r = client.get("/http-error")
    assert r.status_code == 418
    assert r.json() == {"error": "teapot"}


def test_unknown_route_is_json(client):
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


def test_validation_error_is_400_with_field_names(client):
    r = client.post("/body", json={"count": "many"})
    assert r.status_code == 400
    message = r.json()["error"]
    assert "name" in message
    assert "count" in message


def test_unhandled_exception_hides_details(client):
    r = client.get("/boom")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
    assert "secret" not in r.text
