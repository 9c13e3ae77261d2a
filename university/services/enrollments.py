"""
Enrollment rules.

An enrollment is shared: the enrolled student owns its ``status``, the
instructor assigned to the course owns its ``grade``, and admins may change
either. Updates are authorized field by field.
"""

import logging

from sqlalchemy.orm import Session

from university.core.config import ADMIN, STUDENT
from university.core.permissions import check_owner
from university.models.course import Course
from university.models.enrollment import Enrollment
from university.models.user import User
from university.schemas.enrollment import EnrollmentCreate, EnrollmentUpdate
from university.schemas.token import Claim
from university.services.common import (
    changes_of,
    commit,
    ensure_reference,
    ensure_unique,
    get_or_404,
)

logger = logging.getLogger(__name__)

ALREADY_ENROLLED = "Student already enrolled in this course"

# field -> policy operation guarding writes to it
FIELD_POLICIES = {
    "grade": "enrollments.update.grade",
    "status": "enrollments.update.status",
}


def create_enrollment(db: Session, claim: Claim, payload: EnrollmentCreate) -> Enrollment:
    check_owner(db, claim, "enrollments.create", payload)

    ensure_reference(db, User, payload.user_id, "student", User.role == STUDENT)
    ensure_reference(db, Course, payload.course_id, "course")
    ensure_unique(
        db,
        Enrollment,
        ALREADY_ENROLLED,
        Enrollment.user_id == payload.user_id,
        Enrollment.course_id == payload.course_id,
    )

    enrollment = Enrollment(
        user_id=payload.user_id,
        course_id=payload.course_id,
        enrollment_date=payload.enrollment_date,
        status="enrolled",
    )
    db.add(enrollment)
    commit(db, ALREADY_ENROLLED)
    db.refresh(enrollment)

    logger.info(
        "Enrollment created id=%s (user=%s course=%s)",
        enrollment.id,
        enrollment.user_id,
        enrollment.course_id,
    )
    return enrollment


def list_enrollments(db: Session, claim: Claim) -> list[Enrollment]:
    query = db.query(Enrollment)
    if claim.role != ADMIN:
        query = query.filter(Enrollment.user_id == claim.user_id)
    return query.order_by(Enrollment.id).all()


def get_enrollment(db: Session, claim: Claim, enrollment_id: int) -> Enrollment:
    enrollment = get_or_404(db, Enrollment, enrollment_id, "Enrollment")
    check_owner(db, claim, "enrollments.read", enrollment)
    return enrollment


def update_enrollment(
    db: Session, claim: Claim, enrollment_id: int, payload: EnrollmentUpdate
) -> Enrollment:
    enrollment = get_or_404(db, Enrollment, enrollment_id, "Enrollment")
    changes = changes_of(payload)

    for field in changes:
        check_owner(db, claim, FIELD_POLICIES[field], enrollment)

    for field, value in changes.items():
        setattr(enrollment, field, value)
    commit(db, "Enrollment could not be updated")
    db.refresh(enrollment)

    logger.info(
        "Enrollment id=%s updated (%s) by user id=%s",
        enrollment.id,
        ", ".join(sorted(changes)),
        claim.user_id,
    )
    return enrollment


def delete_enrollment(db: Session, claim: Claim, enrollment_id: int) -> None:
    enrollment = get_or_404(db, Enrollment, enrollment_id, "Enrollment")
    check_owner(db, claim, "enrollments.delete", enrollment)

    db.delete(enrollment)
    commit(db, "Enrollment could not be deleted")
    logger.info("Enrollment id=%s deleted by user id=%s", enrollment_id, claim.user_id)


def course_roster(db: Session, claim: Claim, course_id: int) -> list[dict]:
    get_or_404(db, Course, course_id, "Course")
    check_owner(db, claim, "enrollments.by_course", course_id)

    rows = (
        db.query(Enrollment, User)
        .join(User, Enrollment.user_id == User.id)
        .filter(Enrollment.course_id == course_id, User.role == STUDENT)
        .order_by(User.last_name, User.first_name, Enrollment.id)
        .all()
    )
    return [
        {
            "enrollment_id": enrollment.id,
            "user_id": user.id,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
            "status": enrollment.status,
            "grade": enrollment.grade,
        }
        for enrollment, user in rows
    ]
