"""Tests for registration, login, logout and session lookup."""

from datetime import timedelta

from sqlalchemy import func, select

from app.models import Preferences, User
from app.utils.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from tests.helpers import register


def test_register_returns_identity_and_sets_session_cookie(client):
    response = client.post(
        "/api/auth/register", json={"username": "ava", "password": "secret123"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "ava"
    assert isinstance(body["id"], int)

    set_cookie = response.headers["set-cookie"].lower()
    assert "token=" in set_cookie
    assert "httponly" in set_cookie
    assert "secure" in set_cookie
    assert "samesite=none" in set_cookie


def test_register_then_login_yields_same_user_id(client_factory):
    registered = register(client_factory(), "ava")

    response = client_factory().post(
        "/api/auth/login", json={"username": "ava", "password": "secret123"}
    )

    assert response.status_code == 200
    assert response.json() == registered


def test_register_duplicate_username_is_rejected_without_partial_rows(
    client_factory, sync_engine
):
    register(client_factory(), "ava")

    response = client_factory().post(
        "/api/auth/register", json={"username": "ava", "password": "another123"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists"
    with sync_engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(User)).scalar_one() == 1
        assert (
            conn.execute(select(func.count()).select_from(Preferences)).scalar_one() == 1
        )


def test_register_validates_input(client):
    response = client.post("/api/auth/register", json={"username": "ab", "password": "x"})

    assert response.status_code == 422


def test_login_does_not_reveal_which_credential_was_wrong(client_factory):
    register(client_factory(), "ava")

    wrong_password = client_factory().post(
        "/api/auth/login", json={"username": "ava", "password": "nope-nope"}
    )
    unknown_user = client_factory().post(
        "/api/auth/login", json={"username": "bob", "password": "secret123"}
    )

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


def test_me_returns_identity_for_session(client):
    user = register(client, "ava")

    response = client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.json() == user


def test_me_returns_null_without_or_with_garbage_cookie(client_factory):
    anonymous = client_factory()
    assert anonymous.get("/api/auth/me").json() is None

    garbage = client_factory()
    garbage.cookies.set("token", "not-a-jwt")
    response = garbage.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json() is None


def test_logout_clears_session(client):
    register(client, "ava")

    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get("/api/auth/me").json() is None
    assert client.get("/api/user/preferences").status_code == 401


def test_expired_token_is_unauthenticated(client):
    user = register(client, "ava")
    client.cookies.clear()
    client.cookies.set(
        "token",
        create_access_token(user["id"], user["username"], timedelta(seconds=-10)),
    )

    assert client.get("/api/user/preferences").status_code == 401
    assert client.get("/api/auth/me").json() is None


def test_token_carries_id_and_username():
    token = create_access_token(7, "ava")

    payload = decode_access_token(token)

    assert payload["id"] == 7
    assert payload["username"] == "ava"
    assert "exp" in payload


def test_tampered_token_is_rejected():
    token = create_access_token(7, "ava")
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    assert decode_access_token(tampered) is None


def test_register_rejects_passwords_over_72_bytes(client):
    too_long_ascii = client.post(
        "/api/auth/register", json={"username": "bob", "password": "a" * 80}
    )
    too_long_utf8 = client.post(
        "/api/auth/register", json={"username": "bob", "password": "é" * 40}
    )

    assert too_long_ascii.status_code == 422
    assert too_long_utf8.status_code == 422


def test_password_of_exactly_72_bytes_round_trips(client_factory):
    password = "é" * 36
    registered = register(client_factory(), "bob", password)

    response = client_factory().post(
        "/api/auth/login", json={"username": "bob", "password": password}
    )

    assert response.status_code == 200
    assert response.json() == registered


def test_login_with_overlong_password_is_invalid_credentials(client_factory):
    register(client_factory(), "ava")

    response = client_factory().post(
        "/api/auth/login", json={"username": "ava", "password": "a" * 100}
    )

    assert response.status_code == 401


def test_verify_password_refuses_overlong_input():
    hashed = get_password_hash("secret123")

    assert verify_password("secret123", hashed) is True
    assert verify_password("secret123" + "x" * 80, hashed) is False
