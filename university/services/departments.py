import logging

from sqlalchemy.orm import Session

from university.models.department import Department
from university.schemas.department import DepartmentCreate, DepartmentUpdate
from university.schemas.token import Claim
from university.services.common import changes_of, commit, ensure_unique, get_or_404

logger = logging.getLogger(__name__)

CONFLICT = "Department name or code already exists"


def _ensure_free(db: Session, name: str | None, code: str | None, exclude_id: int | None = None) -> None:
    if code is not None:
        ensure_unique(
            db,
            Department,
            "Department code already exists",
            Department.code == code,
            exclude_id=exclude_id,
        )
    if name is not None:
        ensure_unique(
            db,
            Department,
            "Department name already exists",
            Department.name == name,
            exclude_id=exclude_id,
        )


def create_department(db: Session, claim: Claim, payload: DepartmentCreate) -> Department:
    _ensure_free(db, payload.name, payload.code)

    department = Department(name=payload.name, code=payload.code)
    db.add(department)
    commit(db, CONFLICT)
    db.refresh(department)

    logger.info("Department created id=%s by admin id=%s", department.id, claim.user_id)
    return department


def list_departments(db: Session) -> list[Department]:
    return db.query(Department).order_by(Department.id).all()


def get_department(db: Session, department_id: int) -> Department:
    return get_or_404(db, Department, department_id, "Department")


def update_department(
    db: Session, claim: Claim, department_id: int, payload: DepartmentUpdate
) -> Department:
    department = get_or_404(db, Department, department_id, "Department")
    changes = changes_of(payload)
    _ensure_free(db, changes.get("name"), changes.get("code"), exclude_id=department.id)

    for field, value in changes.items():
        setattr(department, field, value)
    commit(db, CONFLICT)
    db.refresh(department)

    logger.info("Department id=%s updated by admin id=%s", department.id, claim.user_id)
    return department


def delete_department(db: Session, claim: Claim, department_id: int) -> None:
    department = get_or_404(db, Department, department_id, "Department")
    # users and courses keep existing with department_id cleared
    db.delete(department)
    commit(db, "Department could not be deleted")
    logger.info("Department id=%s deleted by admin id=%s", department_id, claim.user_id)
