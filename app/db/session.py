from __future__ import annotations

from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def engine_options(db_url: str) -> dict[str, Any]:
    """
    Engine keyword arguments for a given URL.

    SQLite needs `check_same_thread=False` because FastAPI runs sync handlers in a
    thread pool. In-memory SQLite additionally needs a single shared connection,
    otherwise every pooled connection would see its own empty database.
    """

    if not db_url.startswith("sqlite"):
        return {}

    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return options


def build_engine(db_url: str) -> Engine:
    return create_engine(db_url, **engine_options(db_url))


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Main DB dependency: one session per request, always closed afterwards.

    The session factory is built at startup from the app's settings and kept
    on `app.state`.
    """

    factory = getattr(request.app.state, "session_factory", None)
    if factory is None:
        raise RuntimeError("Database not configured. Did app startup run?")

    db = factory()
    try:
        yield db
    finally:
        db.close()
