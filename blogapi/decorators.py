from __future__ import annotations

from functools import wraps
from typing import Any, Callable

import structlog
from flask_login import current_user, login_required


def token_required(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Require a valid bearer token and tag the request's log lines with the user."""

    @wraps(fn)
    @login_required
    def wrapper(*args, **kwargs):
        structlog.contextvars.bind_contextvars(user_id=current_user.id)
        return fn(*args, **kwargs)

    return wrapper
