import logging

from sqlalchemy.orm import Session

from university.core.config import INSTRUCTOR
from university.models.course import Course
from university.models.course_assignment import CourseAssignment
from university.models.user import User
from university.schemas.course_assignment import CourseAssignmentCreate
from university.schemas.token import Claim
from university.services.common import commit, ensure_reference, ensure_unique, get_or_404

logger = logging.getLogger(__name__)

ALREADY_ASSIGNED = "Instructor already assigned to this course"


def create_assignment(db: Session, claim: Claim, payload: CourseAssignmentCreate) -> CourseAssignment:
    ensure_reference(db, User, payload.instructor_id, "instructor", User.role == INSTRUCTOR)
    ensure_reference(db, Course, payload.course_id, "course")
    ensure_unique(
        db,
        CourseAssignment,
        ALREADY_ASSIGNED,
        CourseAssignment.instructor_id == payload.instructor_id,
        CourseAssignment.course_id == payload.course_id,
    )

    assignment = CourseAssignment(
        instructor_id=payload.instructor_id, course_id=payload.course_id
    )
    db.add(assignment)
    commit(db, ALREADY_ASSIGNED)
    db.refresh(assignment)

    logger.info(
        "Course assignment created id=%s (instructor=%s course=%s)",
        assignment.id,
        assignment.instructor_id,
        assignment.course_id,
    )
    return assignment


def list_assignments(db: Session, claim: Claim, mine_only: bool = False) -> list[CourseAssignment]:
    query = db.query(CourseAssignment)
    # instructors only ever see their own; admins see everything
    if mine_only and claim.role == INSTRUCTOR:
        query = query.filter(CourseAssignment.instructor_id == claim.user_id)
    return query.order_by(CourseAssignment.id).all()


def delete_assignment(db: Session, claim: Claim, assignment_id: int) -> None:
    assignment = get_or_404(db, CourseAssignment, assignment_id, "Course assignment")
    db.delete(assignment)
    commit(db, "Course assignment could not be deleted")
    logger.info("Course assignment id=%s deleted by admin id=%s", assignment_id, claim.user_id)
