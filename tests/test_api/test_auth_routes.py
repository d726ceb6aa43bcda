"""
Integration tests for the auth routes: login and token echo.

Fixtures (conftest.py): `client` is a TestClient over a fresh app;
`auth_headers` logs in with the configured admin credential.
"""
from __future__ import annotations

import os
import time
import uuid

import jwt

ADMIN_USERNAME = os.environ["APP_ADMIN_USERNAME"]
ADMIN_PASSWORD = os.environ["APP_ADMIN_PASSWORD"]


def test_login_returns_token(client):
    resp = client.post("/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"token"}
    assert body["token"].count(".") == 2


def test_login_wrong_password_and_wrong_username_look_the_same(client):
    bad_password = client.post("/auth/login", json={"username": ADMIN_USERNAME, "password": "nope"})
    bad_username = client.post("/auth/login", json={"username": "nobody", "password": ADMIN_PASSWORD})

    assert bad_password.status_code == 401
    assert bad_username.status_code == 401
    assert bad_password.json() == bad_username.json() == {"message": "Invalid username or password"}
    assert "token" not in bad_password.json()


def test_login_missing_fields_is_400(client):
    resp = client.post("/auth/login", json={"username": ADMIN_USERNAME})
    assert resp.status_code == 400
    assert any(e["field"] == "password" for e in resp.json()["errors"])


def test_test_token_echoes_claims(client, auth_headers):
    resp = client.get("/auth/test-token", headers=auth_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Token received"
    assert {"type": "sub", "value": ADMIN_USERNAME} in body["claims"]
    assert {"type": "role", "value": "admin"} in body["claims"]
    assert any(c["type"] == "jti" for c in body["claims"])


def test_test_token_requires_token(client):
    resp = client.get("/auth/test-token")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


def test_test_token_rejects_wrong_scheme(client):
    resp = client.get("/auth/test-token", headers={"Authorization": "Basic YWRtaW46YWRtaW4="})
    assert resp.status_code == 401


def test_test_token_rejects_expired_token(client):
    tokens = client.app.state.token_service
    now = int(time.time())
    expired = jwt.encode(
        {
            "sub": ADMIN_USERNAME,
            "role": "admin",
            "jti": uuid.uuid4().hex,
            "iss": tokens.config.issuer,
            "aud": tokens.config.audience,
            "iat": now - 3600,
            "exp": now - 60,
        },
        tokens.config.signing_key,
        algorithm="HS256",
    )

    resp = client.get("/auth/test-token", headers={"Authorization": f"Bearer {expired}"})

    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid or expired token"}


def test_health_is_public(client):
    assert client.get("/health").json() == {"status": "ok"}
