import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from university.core.errors import DuplicateEntity, InvalidReference, NotFound, NoOp

logger = logging.getLogger(__name__)


def get_or_404(db: Session, model, obj_id: int, label: str):
    obj = db.get(model, obj_id)
    if obj is None:
        raise NotFound(f"{label} not found")
    return obj


def ensure_reference(db: Session, model, obj_id: int | None, label: str, *criteria):
    """Resolve a foreign key supplied by the caller; ``None`` means no reference."""
    if obj_id is None:
        return None
    obj = db.query(model).filter(model.id == obj_id, *criteria).first()
    if obj is None:
        raise InvalidReference(f"Invalid {label} ID")
    return obj


def ensure_unique(db: Session, model, message: str, *criteria, exclude_id: int | None = None) -> None:
    query = db.query(model.id).filter(*criteria)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    if query.first() is not None:
        raise DuplicateEntity(message)


def changes_of(payload) -> dict:
    """Fields the caller actually supplied; an empty update is rejected."""
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise NoOp()
    return changes


def commit(db: Session, conflict_message: str) -> None:
    # unique indexes are authoritative; pre-checks only fail fast
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Store rejected write (%s): %s", conflict_message, exc.orig)
        raise DuplicateEntity(conflict_message) from exc
