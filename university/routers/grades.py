from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.grade import GradeSubmit
from university.schemas.token import Claim
from university.services import grades as grade_service

router = APIRouter()


@router.post(
    "",
    responses={
        403: {"description": "Instructor is not assigned to the enrollment's course"},
        404: {"description": "Enrollment not found"},
    },
)
def submit_grade(
    payload: GradeSubmit,
    db: Session = Depends(get_db),
    instructor: Claim = Depends(guard("grades.submit")),
):
    enrollment = grade_service.submit_grade(db, instructor, payload)
    return {
        "enrollment_id": enrollment.id,
        "grade": enrollment.grade,
        "message": "Grade submitted successfully",
    }


@router.get("/enrollment/{enrollment_id}")
def get_grade(
    enrollment_id: int,
    db: Session = Depends(get_db),
    instructor: Claim = Depends(guard("grades.read")),
):
    return grade_service.get_grade(db, instructor, enrollment_id)
