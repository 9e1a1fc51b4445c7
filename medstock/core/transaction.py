"""
Transaction scopes over the session factory.

`transaction_scope` is the unit of work: everything done with the yielded
Session commits together or not at all. Rollback happens on every exit path
that is not a normal return, including domain errors raised mid-way.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .exceptions import PersistenceError

logger = logging.getLogger(__name__)

# serialization_failure, deadlock_detected, lock_not_available
_TRANSIENT_SQLSTATES = {"40001", "40P01", "55P03"}
_TRANSIENT_SQLITE_MESSAGES = ("database is locked", "database table is locked")


def is_transient_failure(exc: SQLAlchemyError) -> bool:
    """True when the failure is a lock/serialization conflict worth retrying"""
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _TRANSIENT_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(marker in message for marker in _TRANSIENT_SQLITE_MESSAGES)


def _failure_reason(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def _apply_lock_timeout(db: Session, lock_timeout_seconds: Optional[float]) -> None:
    # SQLite waits through its busy timeout set on connect
    if not lock_timeout_seconds:
        return
    if db.get_bind().dialect.name == "postgresql":
        millis = int(lock_timeout_seconds * 1000)
        db.execute(text(f"SET LOCAL lock_timeout = '{millis}ms'"))


@contextmanager
def transaction_scope(
    session_factory: sessionmaker,
    operation: str = "unit of work",
    lock_timeout_seconds: Optional[float] = None,
) -> Iterator[Session]:
    """
    Open a Session, begin a transaction and yield it.

    Commits when the block returns normally, rolls back otherwise. Store
    failures (including at commit) surface as PersistenceError; any other
    exception propagates unchanged after the rollback.
    """
    db = session_factory()
    try:
        with db.begin():
            _apply_lock_timeout(db, lock_timeout_seconds)
            yield db
    except SQLAlchemyError as e:
        transient = is_transient_failure(e)
        logger.error(f"Rolled back {operation}: {_failure_reason(e)} (transient={transient})")
        raise PersistenceError(operation, _failure_reason(e), transient=transient) from e
    finally:
        db.close()


@contextmanager
def read_scope(session_factory: sessionmaker, operation: str = "read") -> Iterator[Session]:
    """Session for read-only work; nothing is committed"""
    db = session_factory()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Read failed during {operation}: {_failure_reason(e)}")
        raise PersistenceError(operation, _failure_reason(e), transient=is_transient_failure(e)) from e
    finally:
        db.close()
