from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current time used for column defaults."""
    return datetime.now(timezone.utc)


# Import all models so metadata is complete before create_all()
from blogapi.models.user import User  # noqa: E402
from blogapi.models.blog import Category, Tag, Post, PostTag, PostStatus  # noqa: E402
from blogapi.models.newsletter import NewsletterSubscriber  # noqa: E402

__all__ = [
    "utcnow",
    "User",
    "Category",
    "Tag",
    "Post",
    "PostTag",
    "PostStatus",
    "NewsletterSubscriber",
]
