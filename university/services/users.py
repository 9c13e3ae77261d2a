import logging

from sqlalchemy.orm import Session

from university.core.config import INSTRUCTOR, STUDENT
from university.core.errors import InvalidCredentials, ValidationFailed
from university.core.permissions import check_owner
from university.core.security import create_access_token, hash_password, verify_password
from university.core.validation import field_error
from university.models.department import Department
from university.models.user import User
from university.schemas.token import Claim
from university.schemas.user import UserSelfUpdate, UserUpdate
from university.services.common import (
    changes_of,
    commit,
    ensure_reference,
    ensure_unique,
    get_or_404,
)

logger = logging.getLogger(__name__)

ACCOUNT_CONFLICT = "Email or ID number already exists"


def _ensure_account_free(
    db: Session, email: str | None, id_number: str | None, exclude_id: int | None = None
) -> None:
    if email is not None:
        ensure_unique(
            db, User, "Email already exists", User.email == email, exclude_id=exclude_id
        )
    if id_number:
        ensure_unique(
            db,
            User,
            "ID number already exists",
            User.id_number == id_number,
            exclude_id=exclude_id,
        )


def _apply(user: User, changes: dict) -> None:
    password = changes.pop("password", None)
    if password is not None:
        user.hashed_password = hash_password(password)
    for field, value in changes.items():
        setattr(user, field, value)


def register(db: Session, role: str, payload) -> User:
    """Create an account for ``role`` from a validated registration payload."""
    fields = payload.model_dump()
    password = fields.pop("password")

    ensure_reference(db, Department, fields.get("department_id"), "department")
    _ensure_account_free(db, fields["email"], fields.get("id_number"))

    user = User(role=role, hashed_password=hash_password(password), **fields)
    db.add(user)
    commit(db, ACCOUNT_CONFLICT)
    db.refresh(user)

    logger.info("Registered %s id=%s", role, user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> dict:
    user = db.query(User).filter(User.email == email).first()
    # same error for unknown email and wrong password
    if user is None or not verify_password(password, user.hashed_password):
        raise InvalidCredentials()

    token = create_access_token(
        data={"user_id": user.id, "role": user.role, "first_name": user.first_name}
    )
    return {"token": token, "role": user.role}


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.role, User.id).all()


def list_managed_users(db: Session) -> list[User]:
    return (
        db.query(User)
        .filter(User.role.in_([STUDENT, INSTRUCTOR]))
        .order_by(User.id)
        .all()
    )


def get_user(db: Session, claim: Claim, user_id: int) -> User:
    # ownership first so other accounts' existence is not revealed
    check_owner(db, claim, "users.read", user_id)
    return get_or_404(db, User, user_id, "User")


def update_user(db: Session, claim: Claim, user_id: int, payload: UserUpdate) -> User:
    user = get_or_404(db, User, user_id, "User")
    changes = changes_of(payload)

    role = changes.get("role", user.role)
    id_number = changes["id_number"] if "id_number" in changes else user.id_number
    if role == STUDENT and not id_number:
        raise ValidationFailed(
            [field_error("id_number", "ID number is required for students")]
        )
    if role != STUDENT:
        if changes.get("id_number"):
            raise ValidationFailed(
                [field_error("id_number", "ID number is only allowed for students")]
            )
        # leaving the student role drops the student ID
        changes["id_number"] = None

    if "department_id" in changes:
        ensure_reference(db, Department, changes["department_id"], "department")
    _ensure_account_free(
        db, changes.get("email"), changes.get("id_number"), exclude_id=user.id
    )

    _apply(user, changes)
    commit(db, ACCOUNT_CONFLICT)
    db.refresh(user)

    logger.info("User id=%s updated by admin id=%s", user.id, claim.user_id)
    return user


def update_self(db: Session, claim: Claim, payload: UserSelfUpdate) -> User:
    user = get_or_404(db, User, claim.user_id, "User")
    changes = changes_of(payload)

    _apply(user, changes)
    commit(db, ACCOUNT_CONFLICT)
    db.refresh(user)

    logger.info("User id=%s updated own profile", user.id)
    return user


def delete_user(db: Session, claim: Claim, user_id: int) -> None:
    user = get_or_404(db, User, user_id, "User")
    db.delete(user)
    commit(db, "User could not be deleted")
    logger.info("User id=%s deleted by admin id=%s", user_id, claim.user_id)
