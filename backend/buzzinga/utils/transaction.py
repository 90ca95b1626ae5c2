import logging
from contextlib import contextmanager
from sqlalchemy.exc import IntegrityError, OperationalError
from buzzinga.extensions import db
from buzzinga.domain.exceptions import StorageConflict

logger = logging.getLogger(__name__)

# serialization_failure, deadlock_detected, lock_not_available
CONFLICT_SQLSTATES = {"40001", "40P01", "55P03"}


def is_conflict(exc: OperationalError) -> bool:
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in CONFLICT_SQLSTATES:
        return True

    return "database is locked" in str(orig)


@contextmanager
def transactional():
    """
    Context manager for database transactions.

    Commits on success, rolls back on any error. Aborts caused by a
    concurrent writer are re-raised as StorageConflict.
    """
    try:
        yield
        db.session.commit()
    except OperationalError as exc:
        db.session.rollback()
        if is_conflict(exc):
            logger.warning("Transaction aborted by concurrent write: %s", exc.orig)
            raise StorageConflict() from exc
        raise
    except Exception:
        db.session.rollback()
        raise


def violated_constraint(exc: IntegrityError) -> str:
    """
    Best-effort name of the constraint behind an IntegrityError.

    PostgreSQL exposes it through ``diag``; SQLite only in the message
    (``UNIQUE constraint failed: pages.slug``).
    """
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    return getattr(diag, "constraint_name", None) or str(orig)
