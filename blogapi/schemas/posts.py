from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from blogapi.models.blog import PostStatus
from blogapi.schemas.common import ApiModel, clean_optional_text

TITLE_MAX_LENGTH = 200


def _clean_title(v: str | None) -> str:
    if v is None or not v.strip():
        raise ValueError("Post title is required")
    v = v.strip()
    if len(v) > TITLE_MAX_LENGTH:
        raise ValueError(f"Post title must be at most {TITLE_MAX_LENGTH} characters")
    return v


def _clean_status(v: str) -> str:
    if v not in PostStatus.values():
        raise ValueError(f"Invalid status '{v}', expected one of: {', '.join(PostStatus.values())}")
    return v


class PostCreate(ApiModel):
    title: str | None = Field(default=None, validate_default=True)
    excerpt: str | None = None
    # Validated by blogapi.services.content_blocks so errors name the offending block
    content_blocks: Any = None
    status: str = PostStatus.DRAFT.value
    image: str | None = None
    category_id: int | None = None
    featured: bool = False
    tag_ids: list[int] | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str:
        return _clean_title(v)

    @field_validator("excerpt", "image")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return clean_optional_text(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return _clean_status(v)


class PostUpdate(ApiModel):
    """Partial update; only fields present in the request body are applied."""

    title: str | None = None
    excerpt: str | None = None
    content_blocks: Any = None
    status: str | None = None
    image: str | None = None
    category_id: int | None = None
    featured: bool | None = None
    tag_ids: list[int] | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return None if v is None else _clean_title(v)

    @field_validator("excerpt", "image")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return clean_optional_text(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str | None) -> str | None:
        return None if v is None else _clean_status(v)


class PostStatusUpdate(ApiModel):
    status: str = Field(min_length=1)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return _clean_status(v)


class PostFeaturedUpdate(ApiModel):
    # Omitted means toggle
    featured: bool | None = None
