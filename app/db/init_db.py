from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.db.base import Base
from app.db.session import build_session_factory
from app.models.employee import Employee


def init_db(engine: Engine, seed: bool = False) -> None:
    """
    Create tables, and optionally seed a few demo employees.

    Seeding only happens into an empty table, so restarting is harmless.
    """

    Base.metadata.create_all(bind=engine)

    if not seed:
        return

    with build_session_factory(engine)() as db:
        if _has_seed_data(db):
            return
        _seed(db)


def _has_seed_data(db: Session) -> bool:
    return db.execute(select(Employee.id).limit(1)).first() is not None


def _seed(db: Session) -> None:
    db.add_all(
        [
            Employee(
                first_name="Ed",
                last_name="Engineer",
                email="ed.engineer@example.com",
                department="Engineering",
                salary=Decimal("120000.00"),
            ),
            Employee(
                first_name="Ivy",
                last_name="Analyst",
                email="ivy.analyst@example.com",
                department="IT Support",
                salary=Decimal("85000.00"),
            ),
            Employee(
                first_name="Fran",
                last_name="Finance",
                email="fran.finance@example.com",
                department="Finance",
                salary=Decimal("90000.00"),
            ),
        ]
    )
    db.commit()
