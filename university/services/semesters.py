import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from university.core.errors import HasDependents, ValidationFailed
from university.core.validation import field_error
from university.models.course import Course
from university.models.semester import Semester
from university.schemas.semester import (
    END_BEFORE_START,
    SemesterCreate,
    SemesterUpdate,
)
from university.schemas.token import Claim
from university.services.common import changes_of, commit, get_or_404

logger = logging.getLogger(__name__)


def create_semester(db: Session, claim: Claim, payload: SemesterCreate) -> Semester:
    semester = Semester(
        name=payload.name,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    db.add(semester)
    commit(db, "Semester could not be created")
    db.refresh(semester)

    logger.info("Semester created id=%s (%s)", semester.id, semester.name)
    return semester


def list_semesters(db: Session) -> list[Semester]:
    return db.query(Semester).order_by(Semester.id).all()


def get_semester(db: Session, semester_id: int) -> Semester:
    return get_or_404(db, Semester, semester_id, "Semester")


def update_semester(
    db: Session, claim: Claim, semester_id: int, payload: SemesterUpdate
) -> Semester:
    semester = get_or_404(db, Semester, semester_id, "Semester")
    changes = changes_of(payload)

    # a partial update must still leave the semester ending after it starts
    start_date = changes.get("start_date", semester.start_date)
    end_date = changes.get("end_date", semester.end_date)
    if end_date <= start_date:
        raise ValidationFailed([field_error("end_date", END_BEFORE_START)])

    for field, value in changes.items():
        setattr(semester, field, value)
    commit(db, "Semester could not be updated")
    db.refresh(semester)

    logger.info("Semester id=%s updated by admin id=%s", semester.id, claim.user_id)
    return semester


def delete_semester(db: Session, claim: Claim, semester_id: int) -> None:
    semester = get_or_404(db, Semester, semester_id, "Semester")

    course_count = (
        db.query(func.count(Course.id)).filter(Course.semester_id == semester_id).scalar()
    ) or 0
    if course_count:
        raise HasDependents("Cannot delete semester with associated courses")

    db.delete(semester)
    commit(db, "Semester could not be deleted")
    logger.info("Semester id=%s deleted by admin id=%s", semester_id, claim.user_id)
