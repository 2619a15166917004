import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from animeforge.core.config import settings
from animeforge.core.errors import PersistenceError

logger = logging.getLogger(__name__)


def _connect_args(uri: str) -> dict:
    # SQLite connections are shared across FastAPI's threadpool
    if uri.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    connect_args=_connect_args(settings.SQLALCHEMY_DATABASE_URI),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Create all tables (dev setup; no migrations yet)."""
    from animeforge.db.base import Base
    from animeforge import models  # noqa: F401  registers every table

    Base.metadata.create_all(bind=bind or engine)


def commit_or_raise(db, failure_message: str) -> None:
    """Commit, or roll back and raise PersistenceError with a generic message."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(failure_message)
        raise PersistenceError(failure_message)
