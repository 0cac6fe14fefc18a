# Import commonly used repository functions
from blogapi.repositories.user import (
    get_user_by_id,
    get_user_by_username,
    increment_failed_login_attempts,
    reset_failed_login_attempts,
    is_user_login_locked,
)
from blogapi.repositories.blog import (
    get_category_by_id,
    get_tag_by_id,
    get_tag_by_slug,
    get_post_by_id,
    get_post_by_slug,
)
from blogapi.repositories.newsletter import get_subscriber_by_email

__all__ = [
    # User repositories
    "get_user_by_id",
    "get_user_by_username",
    "increment_failed_login_attempts",
    "reset_failed_login_attempts",
    "is_user_login_locked",
    # Blog repositories
    "get_category_by_id",
    "get_tag_by_id",
    "get_tag_by_slug",
    "get_post_by_id",
    "get_post_by_slug",
    # Newsletter repositories
    "get_subscriber_by_email",
]
