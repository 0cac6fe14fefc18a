from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from blogapi.extensions import db
from blogapi.models.user import User

MAX_FAILED_LOGINS = 3
LOCKOUT_MINUTES = 15


def get_user_by_id(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def get_user_by_username(username: str) -> Optional[User]:
    return db.session.execute(db.select(User).filter_by(username=username)).scalar_one_or_none()


def add_user(*, username: str, email: str, password_hash: str, is_admin: bool = False) -> User:
    user = User(username=username, email=email, password_hash=password_hash, is_admin=is_admin)
    db.session.add(user)
    db.session.flush()
    return user


def increment_failed_login_attempts(user: User) -> None:
    """Increment failed login attempts and set lockout if needed."""
    user.failed_login_attempts += 1
    if user.failed_login_attempts >= MAX_FAILED_LOGINS:
        user.login_locked_until = datetime.now(timezone.utc) + timedelta(minutes=LOCKOUT_MINUTES)


def reset_failed_login_attempts(user: User) -> None:
    user.failed_login_attempts = 0
    user.login_locked_until = None


def is_user_login_locked(user: User) -> bool:
    """Check if user is currently locked out from login attempts."""
    if user.login_locked_until is None:
        return False

    lockout_time = user.login_locked_until
    # SQLite hands back naive datetimes; they are stored as UTC
    if lockout_time.tzinfo is None:
        lockout_time = lockout_time.replace(tzinfo=timezone.utc)

    if datetime.now(timezone.utc) >= lockout_time:
        reset_failed_login_attempts(user)
        return False
    return True
