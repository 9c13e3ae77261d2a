from collections.abc import Iterator

from sqlalchemy.orm import Session

from university.db.session import SessionLocal


def get_db() -> Iterator[Session]:
    """One session per request; a failed request leaves nothing half-written."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
