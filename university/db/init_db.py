from university.db.base import Base
from university.db.session import engine


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
