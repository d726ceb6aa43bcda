from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.db.employee_store import EmployeeStore
from app.db.session import get_db
from app.errors import NotFoundError, ValidationError
from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate, EmployeeOut, EmployeePageOut, EmployeeUpdate, MessageOut

router = APIRouter(prefix="/employees", tags=["employees"])

DEFAULT_PAGE_SIZE = 5

# Ids are 32-bit; anything else does not match the route (404, see app.main).
EmployeeId = Annotated[int, Path(ge=-(2**31), le=2**31 - 1)]


def get_employee_store(db: Session = Depends(get_db)) -> EmployeeStore:
    return EmployeeStore(db)


@router.get("", response_model=EmployeePageOut)
def list_employees(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    department: str | None = Query(None),
    store: EmployeeStore = Depends(get_employee_store),
) -> EmployeePageOut:
    if page_number < 1 or page_size < 1:
        raise ValidationError("Page number and page size must be greater than 0.")

    page = store.query(department, page_number, page_size)
    if not page.items:
        raise NotFoundError("No employees found matching your criteria.")

    return EmployeePageOut(
        total_records=page.total_records,
        page_number=page.page_number,
        page_size=page.page_size,
        total_pages=page.total_pages,
        data=[EmployeeOut.model_validate(e) for e in page.items],
    )


@router.get("/{id}", response_model=EmployeeOut)
def get_employee(id: EmployeeId, store: EmployeeStore = Depends(get_employee_store)) -> Employee:
    return store.find_by_id(id)


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def add_employee(
    payload: EmployeeCreate,
    request: Request,
    response: Response,
    store: EmployeeStore = Depends(get_employee_store),
) -> Employee:
    employee = store.insert(payload)
    response.headers["Location"] = str(request.url_for("get_employee", id=employee.id))
    return employee


@router.put("/{id}", response_model=EmployeeOut)
def update_employee(
    id: EmployeeId,
    payload: EmployeeUpdate,
    store: EmployeeStore = Depends(get_employee_store),
) -> Employee:
    return store.update(id, payload)


@router.delete("/{id}", response_model=MessageOut)
def delete_employee(id: EmployeeId, store: EmployeeStore = Depends(get_employee_store)) -> MessageOut:
    store.delete(id)
    return MessageOut(message="Employee successfully deleted.")
