import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from app.config import settings
from app.errors import ConcurrencyConflict

logger = logging.getLogger(__name__)

_connect_args = {"check_same_thread": False} if settings.DB_URL.startswith("sqlite") else {}

engine = create_engine(settings.DB_URL, echo=settings.DB_ECHO, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run one unit of work: commit on success, roll everything back otherwise.

    A version mismatch on flush means another transaction changed a row we
    decided on; it is reported as the retryable ``ConcurrencyConflict``.
    """
    try:
        yield db
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        logger.warning("optimistic lock conflict: %s", exc)
        raise ConcurrencyConflict() from exc
    except Exception:
        db.rollback()
        raise
