"""
Pytest fixtures for the test suite.

Data-layer tests use an in-memory SQLite engine and a session that rolls back
after each test, so tests do not affect each other. API tests get a fresh app
built from explicit settings, each with its own in-memory database.

The APP_* env vars below fill in whatever those explicit settings leave out
(signing key) and make `get_settings()` safe to call anywhere in the suite.
"""
from __future__ import annotations

import os

os.environ.setdefault("APP_DB_URL", "sqlite://")
os.environ.setdefault("APP_JWT_KEY", "test-signing-key-0123456789-abcdefghij")
os.environ.setdefault("APP_ADMIN_USERNAME", "admin")
os.environ.setdefault("APP_ADMIN_PASSWORD", "s3cret-pass")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


TEST_DB_URL = "sqlite://"
ADMIN_USERNAME = os.environ["APP_ADMIN_USERNAME"]
ADMIN_PASSWORD = os.environ["APP_ADMIN_PASSWORD"]


@pytest.fixture
def engine():
    """Create a fresh in-memory SQLite engine for each test (one shared connection)."""
    return create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )


@pytest.fixture
def tables(engine):
    """Create all ORM tables on the test engine."""
    from app.db.base import Base
    import app.models.employee  # noqa: F401  (register the table)

    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def db_session(tables):
    """
    Provide a Session bound to the test DB; roll back after each test.

    The store commits per operation; those commits stay inside the outer
    transaction, which is rolled back so the next test gets a clean state.
    """
    connection = tables.connect()
    transaction = connection.begin()
    TestSession = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        class_=Session,
    )
    session = TestSession()
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def token_config():
    from app.token_util import TokenConfig

    return TokenConfig(
        signing_key="unit-test-signing-key-0123456789-abcdef",
        issuer="employee-api",
        audience="employee-api-clients",
        expiry_minutes=30,
    )


@pytest.fixture
def token_service(token_config):
    from app.token_util import StaticCredentialVerifier, TokenService

    return TokenService(token_config, StaticCredentialVerifier("admin", "admin-pass"))


@pytest.fixture
def app_settings():
    """Explicit settings for an app instance: a private in-memory database."""
    from app.settings import Settings

    return Settings(db_url="sqlite://", admin_username=ADMIN_USERNAME, admin_password=ADMIN_PASSWORD)


@pytest.fixture
def client(app_settings):
    """TestClient over a fresh app with its own empty database."""
    from app.main import create_app

    with TestClient(create_app(app_settings)) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    resp = client.post("/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
