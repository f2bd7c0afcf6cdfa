from contextlib import contextmanager
from external.database import db


@contextmanager
def session_scope():
    """Provide a transactional scope around a series of operations."""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


@contextmanager
def read_scope():
    """Read-only scope: never commits, rolls back if the block fails."""
    try:
        yield db.session
    except Exception:
        db.session.rollback()
        raise
