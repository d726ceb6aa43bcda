from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)

    # NULL and "" both mean "no department"; filtering treats them the same.
    department: Mapped[str | None] = mapped_column(Text, nullable=True, default="")

    salary: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)

    def __repr__(self) -> str:
        return f"Employee(id={self.id!r}, last_name={self.last_name!r}, department={self.department!r})"
