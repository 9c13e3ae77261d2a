from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.department import DepartmentCreate, DepartmentRead, DepartmentUpdate
from university.schemas.token import Claim
from university.services import departments as department_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_department(
    payload: DepartmentCreate,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("departments.write")),
):
    department = department_service.create_department(db, admin, payload)
    return {"department_id": department.id, "message": "Department created"}


@router.get("", response_model=list[DepartmentRead])
def list_departments(db: Session = Depends(get_db)):
    return department_service.list_departments(db)


@router.get("/{department_id}", response_model=DepartmentRead)
def get_department(department_id: int, db: Session = Depends(get_db)):
    return department_service.get_department(db, department_id)


@router.put("/{department_id}", response_model=DepartmentRead)
def update_department(
    department_id: int,
    payload: DepartmentUpdate,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("departments.write")),
):
    return department_service.update_department(db, admin, department_id, payload)


@router.delete("/{department_id}")
def delete_department(
    department_id: int,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("departments.write")),
):
    department_service.delete_department(db, admin, department_id)
    return {"message": "Department deleted"}
