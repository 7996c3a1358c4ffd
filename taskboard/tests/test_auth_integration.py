from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask

from taskboard.app import create_app
from taskboard.infrastructure.db import ENGINE, Base, SessionLocal
from taskboard.infrastructure.db.models import User


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    SessionLocal.remove()
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def app() -> Flask:
    return create_app()


def _register(client, name="Alice", email="alice@example.com", password="secret123"):
    return client.post(
        "/api/auth/register", json={"name": name, "email": email, "password": password}
    )


def test_register_login_logout_flow(app: Flask) -> None:
    with app.test_client() as client:
        register = _register(client)
        assert register.status_code == 201
        assert register.get_json()["user"]["name"] == "Alice"

        login = client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
        )
        assert login.status_code == 200
        assert login.get_json()["token"]
        assert client.get_cookie("auth_token")

        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.get_json()["user"]["email"] == "alice@example.com"

        logout = client.post("/api/auth/logout")
        assert logout.status_code == 200
        assert client.get_cookie("auth_token") is None

        assert client.get("/api/auth/me").status_code == 401

    session = SessionLocal()
    try:
        stored = session.query(User).one()
        assert stored.password_hash != "secret123"
    finally:
        session.close()


def test_duplicate_registration_conflicts(app: Flask) -> None:
    with app.test_client() as client:
        assert _register(client).status_code == 201
        duplicate = _register(client, name="Imposter")

    assert duplicate.status_code == 409
    assert duplicate.get_json()["error"] == "user_already_exists"


def test_login_failures_share_one_message(app: Flask) -> None:
    with app.test_client() as client:
        _register(client)
        wrong_password = client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "secret124"}
        )
        unknown_email = client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"}
        )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.get_json() == unknown_email.get_json()


def test_bearer_token_works_without_cookie(app: Flask) -> None:
    with app.test_client() as client:
        _register(client)
        token = client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
        ).get_json()["token"]

    with app.test_client() as fresh:
        response = fresh.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_update_profile(app: Flask) -> None:
    with app.test_client() as client:
        _register(client, name="Bob", email="bob@example.com")
        _register(client)
        client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
        )

        renamed = client.put("/api/auth/me", json={"name": "Alicia"})
        taken = client.put("/api/auth/me", json={"email": "bob@example.com"})
        nulled = client.put("/api/auth/me", json={"name": None})

    assert renamed.status_code == 200
    assert renamed.get_json()["user"]["name"] == "Alicia"
    assert taken.status_code == 400
    assert taken.get_json()["error"] == "email_taken"
    assert nulled.status_code == 400


def test_token_for_deleted_user_is_unauthenticated(app: Flask) -> None:
    with app.test_client() as client:
        _register(client)
        client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
        )

        session = SessionLocal()
        try:
            session.query(User).delete()
            session.commit()
        finally:
            session.close()

        response = client.get("/api/auth/me")

    assert response.status_code == 401


def test_health_and_unknown_routes(app: Flask) -> None:
    with app.test_client() as client:
        health = client.get("/api/health")
        missing = client.get("/api/nope")

    assert health.status_code == 200
    assert health.get_json() == {"ok": True, "database": "ok"}
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "not_found"
    assert health.headers["X-Content-Type-Options"] == "nosniff"
    assert health.headers["X-Request-ID"]
