from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

NAME_MAX_LENGTH = 50

# Numeric(15, 2): every such value survives a trip through a JSON number (float).
SALARY_MAX_DIGITS = 15


def _check_email(value: str) -> str:
    # Validate the format only; the address is stored exactly as submitted.
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"Invalid email format: {exc}") from exc
    return value


Email = Annotated[str, AfterValidator(_check_email)]


class _CamelModel(BaseModel):
    # Wire format is camelCase; snake_case is accepted on input too.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmployeeIn(_CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    email: Email
    department: str | None = ""
    salary: Decimal = Field(gt=0, max_digits=SALARY_MAX_DIGITS, decimal_places=2)


class EmployeeCreate(EmployeeIn):
    pass


class EmployeeUpdate(EmployeeIn):
    pass


class EmployeeOut(_CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    department: str | None
    salary: Decimal

    @field_serializer("salary")
    def _salary_as_number(self, salary: Decimal) -> float:
        return float(salary)


class EmployeePageOut(_CamelModel):
    total_records: int
    page_number: int
    page_size: int
    total_pages: int
    data: list[EmployeeOut]


class MessageOut(BaseModel):
    message: str
