import logging

from sqlalchemy.orm import Session

from university.core.permissions import check_owner
from university.models.enrollment import Enrollment
from university.schemas.grade import GradeSubmit
from university.schemas.token import Claim
from university.services.common import commit, get_or_404

logger = logging.getLogger(__name__)


def submit_grade(db: Session, claim: Claim, payload: GradeSubmit) -> Enrollment:
    """Set or replace the grade on an enrollment in one of the instructor's courses."""
    enrollment = get_or_404(db, Enrollment, payload.enrollment_id, "Enrollment")
    check_owner(db, claim, "grades.submit", enrollment)

    previous = enrollment.grade
    enrollment.grade = payload.grade
    commit(db, "Grade could not be saved")
    db.refresh(enrollment)

    logger.info(
        "Grade for enrollment id=%s set %s -> %s by instructor id=%s",
        enrollment.id,
        previous,
        enrollment.grade,
        claim.user_id,
    )
    return enrollment


def get_grade(db: Session, claim: Claim, enrollment_id: int) -> dict:
    enrollment = get_or_404(db, Enrollment, enrollment_id, "Enrollment")
    check_owner(db, claim, "grades.read", enrollment)
    if enrollment.grade is None:
        return {}
    return {"grade": enrollment.grade}
