from __future__ import annotations

from contextlib import contextmanager

import structlog
from sqlalchemy.exc import IntegrityError

from blogapi.errors import ConflictError
from blogapi.extensions import db

logger = structlog.get_logger(__name__)


@contextmanager
def atomic():
    """Run a service operation as one unit of work.

    Everything staged on the session inside the block is committed once on
    exit. Any exception rolls the whole operation back; unique constraint
    violations are re-raised as ``ConflictError``.
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("integrity_conflict", error=str(exc.orig))
        raise ConflictError("The request conflicts with an existing record") from exc
    except Exception:
        db.session.rollback()
        raise
