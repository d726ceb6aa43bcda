"""
Employee Store: the only code that reads or writes the `employees` table.

Every mutating call commits its own unit of work, so each operation is atomic
on its own and nothing spans calls. Concurrent updates of one row follow
last-writer-wins.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from sqlalchemy import String, func, select
from sqlalchemy.orm import Session

from app.errors import NotFoundError, ValidationError
from app.models.employee import Employee

logger = logging.getLogger(__name__)

EMPLOYEE_NOT_FOUND = "Employee not found."

# Largest value a SQL BIGINT (and SQLite INTEGER) bind parameter can carry.
SQL_INT_MAX = 2**63 - 1


class EmployeeData(Protocol):
    """Anything carrying the mutable employee fields (e.g. the request DTOs)."""

    first_name: str
    last_name: str
    email: str
    department: str | None
    salary: Decimal


@dataclass(frozen=True)
class EmployeePage:
    items: list[Employee]
    total_records: int
    page_number: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_records / self.page_size)


class EmployeeStore:
    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, employee_id: int) -> Employee:
        if not -SQL_INT_MAX - 1 <= employee_id <= SQL_INT_MAX:
            # No row can carry an id the database cannot even bind.
            raise NotFoundError(EMPLOYEE_NOT_FOUND)
        employee = self._db.get(Employee, employee_id)
        if employee is None:
            raise NotFoundError(EMPLOYEE_NOT_FOUND)
        return employee

    def insert(self, data: EmployeeData) -> Employee:
        # Any id on the incoming data is ignored; the database assigns one.
        employee = Employee()
        _apply(employee, data)
        self._db.add(employee)
        self._db.commit()
        self._db.refresh(employee)
        logger.info("Employee created id=%s", employee.id)
        return employee

    def update(self, employee_id: int, data: EmployeeData) -> Employee:
        employee = self.find_by_id(employee_id)
        _apply(employee, data)
        self._db.commit()
        self._db.refresh(employee)
        logger.info("Employee updated id=%s", employee.id)
        return employee

    def delete(self, employee_id: int) -> None:
        employee = self.find_by_id(employee_id)
        self._db.delete(employee)
        self._db.commit()
        logger.info("Employee deleted id=%s", employee_id)

    def query(self, department: str | None, page_number: int, page_size: int) -> EmployeePage:
        """
        Filtered, paginated scan ordered by id ascending.

        `department` is a case-insensitive substring match; NULL departments
        compare as the empty string. A blank filter matches everything.
        """

        if page_number < 1 or page_size < 1:
            raise ValidationError("Page number and page size must be greater than 0.")

        stmt = select(Employee)
        if department is not None and department.strip():
            column = func.lower(func.coalesce(Employee.department, ""), type_=String)
            stmt = stmt.where(column.contains(department.lower(), autoescape=True))

        # Clamp to what the database can bind; a page that far out is simply empty.
        offset = min((page_number - 1) * page_size, SQL_INT_MAX)
        limit = min(page_size, SQL_INT_MAX)

        total_records = self._db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        items = list(self._db.scalars(stmt.order_by(Employee.id).offset(offset).limit(limit)).all())

        return EmployeePage(
            items=items,
            total_records=total_records,
            page_number=page_number,
            page_size=page_size,
        )


def _apply(employee: Employee, data: EmployeeData) -> None:
    employee.first_name = data.first_name
    employee.last_name = data.last_name
    employee.email = data.email
    employee.department = data.department
    employee.salary = data.salary
