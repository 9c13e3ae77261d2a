from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.semester import SemesterCreate, SemesterRead, SemesterUpdate
from university.schemas.token import Claim
from university.services import semesters as semester_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_semester(
    payload: SemesterCreate,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("semesters.write")),
):
    semester = semester_service.create_semester(db, admin, payload)
    return {"semester_id": semester.id, "message": "Semester created"}


@router.get("", response_model=list[SemesterRead])
def list_semesters(db: Session = Depends(get_db)):
    return semester_service.list_semesters(db)


@router.get("/{semester_id}", response_model=SemesterRead)
def get_semester(semester_id: int, db: Session = Depends(get_db)):
    return semester_service.get_semester(db, semester_id)


@router.put("/{semester_id}", response_model=SemesterRead)
def update_semester(
    semester_id: int,
    payload: SemesterUpdate,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("semesters.write")),
):
    return semester_service.update_semester(db, admin, semester_id, payload)


@router.delete(
    "/{semester_id}",
    responses={400: {"description": "Semester still has courses"}},
)
def delete_semester(
    semester_id: int,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("semesters.write")),
):
    semester_service.delete_semester(db, admin, semester_id)
    return {"message": "Semester deleted"}
