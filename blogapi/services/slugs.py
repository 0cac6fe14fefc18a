from __future__ import annotations

import structlog
from flask import current_app

from blogapi.errors import SlugExhaustedError, ValidationError
from blogapi.repositories.blog import slug_taken
from blogapi.utils.slug import slugify

logger = structlog.get_logger(__name__)


def _slug_length(model) -> int | None:
    return getattr(model.__table__.c.slug.type, "length", None)


def _fit(base: str, suffix: str, max_length: int | None) -> str:
    if max_length is None or len(base) + len(suffix) <= max_length:
        return f"{base}{suffix}"
    return f"{base[:max_length - len(suffix)].rstrip('-')}{suffix}"


def resolve_unique_slug(model, text: str, exclude_id: int | None = None, max_attempts: int | None = None) -> str:
    """Return ``slugify(text)``, suffixed ``-1``, ``-2``... until no other row of ``model`` uses it.

    ``exclude_id`` is the id of the row being renamed so it does not collide
    with itself. Long bases are cut so base plus suffix fits the slug column.
    Uniqueness holds at the time of the check only; the unique index on
    ``slug`` catches concurrent writers at commit.
    """
    base = slugify(text)
    if not base:
        raise ValidationError("Name must contain at least one letter or digit")

    max_length = _slug_length(model)
    if max_attempts is None:
        max_attempts = current_app.config.get("SLUG_MAX_ATTEMPTS", 1000)

    candidate = _fit(base, "", max_length)
    for n in range(1, max_attempts + 1):
        if not slug_taken(model, candidate, exclude_id):
            return candidate
        candidate = _fit(base, f"-{n}", max_length)

    logger.error("slug_exhausted", model=model.__tablename__, base=base, attempts=max_attempts)
    raise SlugExhaustedError(base, max_attempts)
