from __future__ import annotations

import sqlite3

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _unicode_lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


@event.listens_for(Engine, "connect")
def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    """
    SQLite's built-in lower() only folds ASCII. Replace it with Python's on every
    SQLite connection so `lower(column)` agrees with `str.lower()` on the filter.
    """

    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)
