from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.grade import SemesterReport
from university.schemas.token import Claim
from university.services.reports import student_grade_report

router = APIRouter(tags=["student"])


@router.get("/student/grades", response_model=dict[str, SemesterReport])
def my_grades(
    db: Session = Depends(get_db),
    me: Claim = Depends(guard("student.grades")),
):
    return student_grade_report(db, me)
