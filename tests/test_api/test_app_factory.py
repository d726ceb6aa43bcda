"""
Tests for `create_app`: explicit settings drive the app's resources, and auth
failures raised anywhere in a request map to the right 401 body.
"""
from __future__ import annotations

import os

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from app.main import create_app
from app.models.employee import Employee
from app.security.auth import INVALID_TOKEN
from app.settings import Settings
from app.token_util import InvalidCredentialsError, InvalidTokenError

ADMIN_USERNAME = os.environ["APP_ADMIN_USERNAME"]
ADMIN_PASSWORD = os.environ["APP_ADMIN_PASSWORD"]


def _login(client: TestClient) -> dict[str, str]:
    resp = client.post("/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def test_app_uses_database_from_given_settings(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'employees.db'}"
    settings = Settings(db_url=db_url, admin_username=ADMIN_USERNAME, admin_password=ADMIN_PASSWORD)

    with TestClient(create_app(settings)) as client:
        resp = client.post(
            "/employees",
            json={"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com", "salary": 42},
            headers=_login(client),
        )
        assert resp.status_code == 201
        created_id = resp.json()["id"]

    engine = create_engine(db_url)
    try:
        with Session(engine) as session:
            rows = session.scalars(select(Employee)).all()
    finally:
        engine.dispose()

    assert [(e.id, e.email) for e in rows] == [(created_id, "ada@example.com")]


def test_apps_with_separate_settings_do_not_share_data(app_settings):
    other = Settings(db_url="sqlite://", admin_username=ADMIN_USERNAME, admin_password=ADMIN_PASSWORD)

    with TestClient(create_app(app_settings)) as first, TestClient(create_app(other)) as second:
        resp = first.post(
            "/employees",
            json={"firstName": "A", "lastName": "B", "email": "a@b.com", "salary": 1},
            headers=_login(first),
        )
        assert resp.status_code == 201

        assert first.get("/employees").status_code == 200
        assert second.get("/employees").status_code == 404


def test_invalid_token_and_invalid_credentials_have_distinct_messages(app_settings):
    app = create_app(app_settings)

    def reject_token():
        raise InvalidTokenError("Token expired")

    def reject_credentials():
        raise InvalidCredentialsError()

    # Unlisted routes are public, so the handlers see the exceptions directly.
    app.add_api_route("/_reject/token", reject_token, methods=["GET"])
    app.add_api_route("/_reject/credentials", reject_credentials, methods=["GET"])

    with TestClient(app) as client:
        token_resp = client.get("/_reject/token")
        credentials_resp = client.get("/_reject/credentials")

    assert token_resp.status_code == 401
    assert token_resp.json() == {"message": INVALID_TOKEN}
    assert token_resp.headers["www-authenticate"] == "Bearer"

    assert credentials_resp.status_code == 401
    assert credentials_resp.json() == {"message": "Invalid username or password"}
