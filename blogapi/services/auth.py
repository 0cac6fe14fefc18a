from __future__ import annotations

from datetime import datetime, timezone
from typing import Tuple

import structlog

from blogapi.models import utcnow
from blogapi.models.user import User
from blogapi.repositories.user import (
    LOCKOUT_MINUTES,
    MAX_FAILED_LOGINS,
    add_user,
    get_user_by_username,
    increment_failed_login_attempts,
    is_user_login_locked,
    reset_failed_login_attempts,
)
from blogapi.services.transaction import atomic
from blogapi.utils.crypto import hash_password, verify_password

logger = structlog.get_logger(__name__)


def authenticate(username: str, password: str) -> Tuple[User | None, str | None]:
    """
    Authenticate user with lockout after repeated failures.
    Returns (user, error_message) tuple.
    """
    with atomic():
        user = get_user_by_username(username)
        if not user:
            return None, "Invalid username or password"

        if is_user_login_locked(user):
            lockout_time = user.login_locked_until
            if lockout_time.tzinfo is None:
                lockout_time = lockout_time.replace(tzinfo=timezone.utc)
            remaining_seconds = (lockout_time - datetime.now(timezone.utc)).total_seconds()
            remaining_minutes = min(max(1, int(remaining_seconds / 60)), LOCKOUT_MINUTES)
            logger.warning("login_locked", user_id=user.id)
            return None, (
                f"Account locked due to {MAX_FAILED_LOGINS} failed login attempts. "
                f"Please try again in {remaining_minutes} minutes."
            )

        if not verify_password(password, user.password_hash):
            increment_failed_login_attempts(user)
            attempts_remaining = MAX_FAILED_LOGINS - user.failed_login_attempts
            logger.warning("login_failed", user_id=user.id, attempts_remaining=max(attempts_remaining, 0))
            if attempts_remaining > 0:
                return None, (
                    f"Invalid username or password. {attempts_remaining} attempts remaining "
                    "before account lockout."
                )
            return None, (
                "Invalid username or password. Account has been locked for "
                f"{LOCKOUT_MINUTES} minutes due to too many failed attempts."
            )

        reset_failed_login_attempts(user)
        user.last_login = utcnow()
    logger.info("login_succeeded", user_id=user.id)
    return user, None


def create_user(username: str, email: str, password: str, is_admin: bool = False) -> User:
    with atomic():
        user = add_user(
            username=username.strip(),
            email=email.strip().lower(),
            password_hash=hash_password(password),
            is_admin=is_admin,
        )
    logger.info("user_created", user_id=user.id, is_admin=is_admin)
    return user
