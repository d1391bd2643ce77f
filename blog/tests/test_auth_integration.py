from __future__ import annotations

from datetime import timedelta

import pytest
from conftest import FrozenClock, session_cookie, session_token
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy import select

from blog.app import create_app
from blog.application.services.password_hashing import Pbkdf2PasswordHasher
from blog.infrastructure.container import Container
from blog.infrastructure.db import models
from blog.infrastructure.unit_of_work import unit_of_work_scope
from blog.shared.config import AppConfig

REGISTER_BODY = {
    "username": "alice",
    "name": "Alice",
    "email": "alice@x.com",
    "date_of_birth": "1990-01-01",
    "password": "P@ssw0rd!",
}


@pytest.fixture()
def container(app_config: AppConfig, clock: FrozenClock):
    container = Container(
        app_config, clock=clock, password_hasher=Pbkdf2PasswordHasher(iterations=1_000)
    )
    yield container
    container.engine.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    # the session cookie is Secure, so it is replayed by hand
    return app.test_client(use_cookies=False)


def _with_session(token: str) -> dict[str, str]:
    return {"Cookie": f"BlogSession={token}"}


def _register_and_login(client: FlaskClient) -> str:
    assert client.post("/api/auth/register", json=REGISTER_BODY).status_code == 201
    login = client.post(
        "/api/auth/login", json={"username": "alice", "password": "P@ssw0rd!"}
    )
    assert login.status_code == 200
    token = session_token(login)
    assert token
    return token


def _stored_session(container: Container, token: str) -> models.Session | None:
    with unit_of_work_scope(container.session_factory) as db:
        return db.get(models.Session, token)


def test_register_login_me_logout_flow(client: FlaskClient, container: Container) -> None:
    token = _register_and_login(client)

    me = client.get("/api/auth/me", headers=_with_session(token))
    assert me.status_code == 200
    assert me.get_json()["username"] == "alice"
    assert session_token(me) == token

    logout = client.post("/api/auth/logout", headers=_with_session(token))
    assert logout.status_code == 200
    cleared = session_cookie(logout)
    assert cleared is not None
    assert cleared.startswith("BlogSession=;")

    assert client.get("/api/auth/me", headers=_with_session(token)).status_code == 401
    assert _stored_session(container, token).is_active is False


def test_register_twice_conflicts(client: FlaskClient) -> None:
    assert client.post("/api/auth/register", json=REGISTER_BODY).status_code == 201

    same_name = client.post(
        "/api/auth/register", json={**REGISTER_BODY, "email": "other@x.com"}
    )
    same_email = client.post(
        "/api/auth/register", json={**REGISTER_BODY, "username": "alice2"}
    )

    assert same_name.status_code == 409
    assert same_name.get_json()["context"] == {"field": "username"}
    assert same_email.status_code == 409
    assert same_email.get_json()["context"] == {"field": "email"}


def test_login_with_wrong_password_is_rejected(client: FlaskClient) -> None:
    client.post("/api/auth/register", json=REGISTER_BODY)

    wrong = client.post("/api/auth/login", json={"username": "alice", "password": "Nope1!xx"})
    unknown = client.post("/api/auth/login", json={"username": "bob", "password": "Nope1!xx"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json() == {"error": "invalid_credentials"}


def test_session_slides_on_each_request(
    client: FlaskClient, container: Container, clock: FrozenClock
) -> None:
    token = _register_and_login(client)

    clock.advance(minutes=4)
    assert client.get("/api/auth/me", headers=_with_session(token)).status_code == 200
    assert _stored_session(container, token).expires_at == clock.now + timedelta(minutes=5)

    clock.advance(minutes=4)
    assert client.get("/api/auth/me", headers=_with_session(token)).status_code == 200


def test_renewed_cookie_is_sent_with_error_responses(
    client: FlaskClient, container: Container, clock: FrozenClock
) -> None:
    token = _register_and_login(client)

    clock.advance(minutes=3)
    response = client.post(
        "/api/articles/999/comments", json={"content": "hi"}, headers=_with_session(token)
    )

    assert response.status_code == 404
    renewed = session_cookie(response)
    assert renewed is not None
    assert renewed.startswith(f"BlogSession={token};")
    assert "01 Mar 2024 12:08:00 GMT" in renewed
    assert _stored_session(container, token).expires_at == clock.now + timedelta(minutes=5)


def test_alice_is_anonymous_after_session_duration(
    client: FlaskClient, container: Container, clock: FrozenClock
) -> None:
    token = _register_and_login(client)

    clock.advance(minutes=5, seconds=1)
    response = client.get("/api/auth/me", headers=_with_session(token))

    assert response.status_code == 401
    assert _stored_session(container, token).is_active is False


def test_logout_without_cookie_still_succeeds(client: FlaskClient) -> None:
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "user": None}
    assert session_cookie(response) is None


def test_cleanup_purges_dead_sessions(
    client: FlaskClient, container: Container, clock: FrozenClock
) -> None:
    logged_out = _register_and_login(client)
    client.post("/api/auth/logout", headers=_with_session(logged_out))
    expired = session_token(
        client.post("/api/auth/login", json={"username": "alice", "password": "P@ssw0rd!"})
    )

    clock.advance(minutes=6)
    alive = session_token(
        client.post("/api/auth/login", json={"username": "alice", "password": "P@ssw0rd!"})
    )

    assert container.cleanup_sessions_use_case.execute() == 2
    with unit_of_work_scope(container.session_factory) as db:
        remaining = set(db.scalars(select(models.Session.session_id)))
    assert remaining == {alive}
    assert expired not in remaining


def test_health_and_security_headers(client: FlaskClient) -> None:
    response = client.get("/api/health", headers={"X-Request-ID": "req-42"})

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Request-ID"] == "req-42"
    assert "Strict-Transport-Security" not in response.headers


def test_rate_limit_rejects_burst(app_config: AppConfig, clock: FrozenClock) -> None:
    app_config.security.enable_rate_limit = True
    container = Container(app_config, clock=clock)
    app = create_app(container=container)
    client = app.test_client(use_cookies=False)

    statuses = [
        client.post("/api/auth/login", json={"username": "ghost", "password": "x"}).status_code
        for _ in range(11)
    ]

    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429
    container.engine.dispose()


def test_csrf_double_submit_is_enforced_when_enabled(
    app_config: AppConfig, clock: FrozenClock
) -> None:
    app_config.security.enable_csrf = True
    container = Container(app_config, clock=clock)
    client = create_app(container=container).test_client(use_cookies=False)

    issued = client.get("/api/health")
    missing = client.post("/api/auth/login", json={"username": "alice", "password": "x"})
    matching = client.post(
        "/api/auth/login",
        json={"username": "alice", "password": "x"},
        headers={"Cookie": "csrf_token=tok-123", "X-CSRF-Token": "tok-123"},
    )

    assert session_cookie(issued, "csrf_token") is not None
    assert missing.status_code == 403
    assert missing.get_json() == {"error": "csrf"}
    assert matching.status_code == 401
    container.engine.dispose()
