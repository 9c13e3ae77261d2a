import logging

from sqlalchemy.orm import Session

from university.models.course import Course
from university.models.department import Department
from university.models.semester import Semester
from university.schemas.course import CourseCreate, CourseUpdate
from university.schemas.token import Claim
from university.services.common import (
    changes_of,
    commit,
    ensure_reference,
    ensure_unique,
    get_or_404,
)

logger = logging.getLogger(__name__)

CODE_TAKEN = "Course code already exists"


def _resolve_references(db: Session, fields: dict) -> None:
    if "department_id" in fields:
        ensure_reference(db, Department, fields["department_id"], "department")
    if "semester_id" in fields:
        ensure_reference(db, Semester, fields["semester_id"], "semester")


def create_course(db: Session, claim: Claim, payload: CourseCreate) -> Course:
    fields = payload.model_dump()
    _resolve_references(db, fields)
    ensure_unique(db, Course, CODE_TAKEN, Course.code == payload.code)

    course = Course(**fields)
    db.add(course)
    commit(db, CODE_TAKEN)
    db.refresh(course)

    logger.info("Course created id=%s code=%s", course.id, course.code)
    return course


def list_courses(db: Session) -> list[Course]:
    return db.query(Course).order_by(Course.id).all()


def get_course(db: Session, course_id: int) -> Course:
    return get_or_404(db, Course, course_id, "Course")


def update_course(db: Session, claim: Claim, course_id: int, payload: CourseUpdate) -> Course:
    course = get_or_404(db, Course, course_id, "Course")
    changes = changes_of(payload)

    _resolve_references(db, changes)
    if "code" in changes:
        ensure_unique(
            db, Course, CODE_TAKEN, Course.code == changes["code"], exclude_id=course.id
        )

    for field, value in changes.items():
        setattr(course, field, value)
    commit(db, CODE_TAKEN)
    db.refresh(course)

    logger.info("Course id=%s updated by admin id=%s", course.id, claim.user_id)
    return course


def delete_course(db: Session, claim: Claim, course_id: int) -> None:
    course = get_or_404(db, Course, course_id, "Course")
    # enrollments and instructor assignments go with the course
    db.delete(course)
    commit(db, "Course could not be deleted")
    logger.info("Course id=%s deleted by admin id=%s", course_id, claim.user_id)
