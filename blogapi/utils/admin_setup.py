from __future__ import annotations

from typing import Optional

import structlog
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from blogapi.extensions import db
from blogapi.models.user import User

logger = structlog.get_logger(__name__)


def ensure_admin_user() -> Optional[str]:
    """
    Check if an admin user exists in the database.

    Admin users are created with the 'flask create-admin' CLI command. Database
    errors are logged and never prevent app startup.

    Returns:
        Status message if no admin user exists, None if admin exists or on error
    """
    try:
        # Skip check if the users table doesn't exist yet (e.g. before init-db)
        if not inspect(db.engine).has_table("users"):
            logger.info("admin_check_skipped", reason="users table missing")
            return None

        if check_admin_user_exists():
            return None

        logger.warning("admin_missing", hint="flask create-admin")
        return "No admin user found. Use 'flask create-admin' to create one."

    except SQLAlchemyError as e:
        logger.error("admin_check_failed", error=str(e))
        return None


def check_admin_user_exists() -> bool:
    """
    Check if any admin user exists in the database.

    Returns:
        True if at least one admin user exists, False otherwise
    """
    if not inspect(db.engine).has_table("users"):
        return False

    admin_count = db.session.execute(
        db.select(db.func.count(User.id)).filter_by(is_admin=True)
    ).scalar()

    return admin_count > 0
