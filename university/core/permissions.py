"""
Role and ownership policy.

``POLICIES`` maps every guarded operation to the roles that may call it and,
where access depends on the specific row, an ownership predicate. Routes
apply the role half through ``guard(operation)`` before any domain logic
runs; enforcers apply the ownership half through ``check_owner`` once the
target row has been fetched. Admins always satisfy ownership predicates.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from fastapi import Depends
from sqlalchemy.orm import Session

from university.core.config import ADMIN, INSTRUCTOR, ROLES, STUDENT
from university.core.current_user import get_current_claim
from university.core.errors import Forbidden
from university.models.course_assignment import CourseAssignment
from university.schemas.token import Claim

OwnerPredicate = Callable[[Session, Claim, Any], bool]

ANY_ROLE = frozenset(ROLES)
ADMIN_ONLY = frozenset({ADMIN})
INSTRUCTOR_ONLY = frozenset({INSTRUCTOR})
STUDENT_ONLY = frozenset({STUDENT})
STAFF = frozenset({INSTRUCTOR, ADMIN})


def is_self(db: Session, claim: Claim, user_id: int) -> bool:
    return user_id == claim.user_id


def is_enrolled_student(db: Session, claim: Claim, enrollment) -> bool:
    # works for stored enrollments and for create payloads alike
    return enrollment.user_id == claim.user_id


def is_assigned_instructor(db: Session, claim: Claim, target) -> bool:
    """``target`` is a course id or anything carrying ``course_id``."""
    course_id = target if isinstance(target, int) else target.course_id
    return (
        db.query(CourseAssignment)
        .filter(
            CourseAssignment.instructor_id == claim.user_id,
            CourseAssignment.course_id == course_id,
        )
        .first()
        is not None
    )


def is_student_or_assigned_instructor(db: Session, claim: Claim, enrollment) -> bool:
    return is_enrolled_student(db, claim, enrollment) or is_assigned_instructor(
        db, claim, enrollment
    )


@dataclass(frozen=True)
class Policy:
    roles: frozenset[str]
    owner: OwnerPredicate | None = None
    message: str = "Unauthorized access"


POLICIES: dict[str, Policy] = {
    # users
    "users.register_instructor": Policy(ADMIN_ONLY),
    "users.register_admin": Policy(ADMIN_ONLY),
    "users.list_managed": Policy(ADMIN_ONLY),
    "users.me": Policy(ANY_ROLE),
    "users.update_self": Policy(ANY_ROLE),
    "users.read": Policy(ANY_ROLE, owner=is_self),
    "users.update": Policy(ADMIN_ONLY),
    "users.delete": Policy(ADMIN_ONLY),
    # reference data
    "departments.write": Policy(ADMIN_ONLY),
    "courses.write": Policy(ADMIN_ONLY),
    "semesters.write": Policy(ADMIN_ONLY),
    # enrollments
    "enrollments.create": Policy(
        ANY_ROLE, owner=is_enrolled_student, message="Students can only enroll themselves"
    ),
    "enrollments.list": Policy(ANY_ROLE),
    "enrollments.read": Policy(
        ANY_ROLE, owner=is_student_or_assigned_instructor, message="Access denied"
    ),
    "enrollments.update": Policy(ANY_ROLE),
    "enrollments.update.grade": Policy(
        ANY_ROLE,
        owner=is_assigned_instructor,
        message="Only instructors assigned to the course or admins can update grades",
    ),
    "enrollments.update.status": Policy(
        ANY_ROLE,
        owner=is_enrolled_student,
        message="Students can only update their own enrollment status",
    ),
    "enrollments.delete": Policy(
        ANY_ROLE, owner=is_enrolled_student, message="Access denied"
    ),
    "enrollments.by_course": Policy(
        INSTRUCTOR_ONLY,
        owner=is_assigned_instructor,
        message="Instructor is not assigned to this course",
    ),
    # course assignments
    "course_assignments.write": Policy(ADMIN_ONLY),
    "course_assignments.list": Policy(ADMIN_ONLY),
    "course_assignments.mine": Policy(STAFF),
    # grades
    "grades.submit": Policy(
        INSTRUCTOR_ONLY,
        owner=is_assigned_instructor,
        message="Instructor is not assigned to this course",
    ),
    "grades.read": Policy(
        INSTRUCTOR_ONLY,
        owner=is_assigned_instructor,
        message="Instructor is not assigned to this course",
    ),
    "student.grades": Policy(STUDENT_ONLY, message="Access restricted to students"),
}


def require_role(claim: Claim, allowed_roles: Iterable[str], message: str | None = None) -> Claim:
    if claim.role not in allowed_roles:
        raise Forbidden(message)
    return claim


def check_owner(db: Session, claim: Claim, operation: str, target) -> None:
    policy = POLICIES[operation]
    require_role(claim, policy.roles, policy.message)
    if policy.owner is None or claim.role == ADMIN:
        return
    if not policy.owner(db, claim, target):
        raise Forbidden(policy.message)


def guard(operation: str):
    """Dependency: authenticated claim whose role is allowed for ``operation``."""
    policy = POLICIES[operation]

    def dependency(claim: Claim = Depends(get_current_claim)) -> Claim:
        # role-only messages stay generic; row-level messages belong to check_owner
        return require_role(
            claim, policy.roles, None if policy.owner else policy.message
        )

    return dependency
