from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.enrollment import (
    CourseRosterRow,
    EnrollmentCreate,
    EnrollmentListRow,
    EnrollmentRead,
    EnrollmentUpdate,
)
from university.schemas.token import Claim
from university.services import enrollments as enrollment_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_enrollment(
    payload: EnrollmentCreate,
    db: Session = Depends(get_db),
    me: Claim = Depends(guard("enrollments.create")),
):
    enrollment = enrollment_service.create_enrollment(db, me, payload)
    return {"enrollment_id": enrollment.id, "message": "Enrollment created"}


@router.get("", response_model=list[EnrollmentListRow])
def list_enrollments(
    db: Session = Depends(get_db),
    me: Claim = Depends(guard("enrollments.list")),
):
    return enrollment_service.list_enrollments(db, me)


@router.get("/course/{course_id}", response_model=list[CourseRosterRow])
def course_roster(
    course_id: int,
    db: Session = Depends(get_db),
    instructor: Claim = Depends(guard("enrollments.by_course")),
):
    return enrollment_service.course_roster(db, instructor, course_id)


@router.get("/{enrollment_id}", response_model=EnrollmentRead)
def get_enrollment(
    enrollment_id: int,
    db: Session = Depends(get_db),
    me: Claim = Depends(guard("enrollments.read")),
):
    return enrollment_service.get_enrollment(db, me, enrollment_id)


@router.put("/{enrollment_id}", response_model=EnrollmentRead)
def update_enrollment(
    enrollment_id: int,
    payload: EnrollmentUpdate,
    db: Session = Depends(get_db),
    me: Claim = Depends(guard("enrollments.update")),
):
    return enrollment_service.update_enrollment(db, me, enrollment_id, payload)


@router.delete("/{enrollment_id}")
def delete_enrollment(
    enrollment_id: int,
    db: Session = Depends(get_db),
    me: Claim = Depends(guard("enrollments.delete")),
):
    enrollment_service.delete_enrollment(db, me, enrollment_id)
    return {"message": "Enrollment deleted"}
