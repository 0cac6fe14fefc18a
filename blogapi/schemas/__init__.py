from __future__ import annotations

# Re-export common schema classes for convenient imports
from .auth import LoginRequest  # noqa: F401
from .categories import CategoryCreate, CategoryUpdate  # noqa: F401
from .tags import TagCreate, TagUpdate  # noqa: F401
from .posts import PostCreate, PostUpdate, PostStatusUpdate, PostFeaturedUpdate  # noqa: F401
from .newsletter import SubscriptionRequest  # noqa: F401

__all__ = [
    "LoginRequest",
    "CategoryCreate",
    "CategoryUpdate",
    "TagCreate",
    "TagUpdate",
    "PostCreate",
    "PostUpdate",
    "PostStatusUpdate",
    "PostFeaturedUpdate",
    "SubscriptionRequest",
]
