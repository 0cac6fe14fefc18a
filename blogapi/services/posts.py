from __future__ import annotations

from typing import Any

import structlog

from blogapi.errors import NotFoundError, ValidationError
from blogapi.models import utcnow
from blogapi.models.blog import Post, PostStatus
from blogapi.repositories.blog import (
    add_post,
    add_post_tags,
    clear_post_tags,
    delete_post as _delete_post,
    get_category_by_id,
    get_post_by_id,
    get_post_by_slug,
    get_post_tag_ids,
    get_tags_by_ids,
    increment_post_views,
)
from blogapi.schemas.posts import PostCreate, PostFeaturedUpdate, PostStatusUpdate, PostUpdate
from blogapi.services.content_blocks import validate_content_blocks
from blogapi.services.counters import recount_category_posts, recount_tags
from blogapi.services.slugs import resolve_unique_slug
from blogapi.services.transaction import atomic

logger = structlog.get_logger(__name__)


def get_post_or_404(post_id: int) -> Post:
    p = get_post_by_id(post_id)
    if p is None:
        raise NotFoundError("Post not found")
    return p


def _require_category(category_id: int | None) -> int:
    if category_id is None:
        raise ValidationError("Category is required")
    if get_category_by_id(category_id) is None:
        raise ValidationError("Category not found")
    return category_id


def _require_content(blocks: Any) -> list[dict]:
    if blocks is None or blocks == []:
        raise ValidationError("Post content is required")
    return validate_content_blocks(blocks)


def _require_tags(tag_ids: list[int]) -> list[int]:
    wanted = list(dict.fromkeys(tag_ids))
    found = {t.id for t in get_tags_by_ids(wanted)}
    missing = [str(tid) for tid in wanted if tid not in found]
    if missing:
        raise ValidationError(f"Tag(s) not found: {', '.join(missing)}")
    return wanted


def _apply_status(p: Post, status: str) -> None:
    """Set status; entering 'published' stamps published_at, leaving it clears it."""
    if status == PostStatus.PUBLISHED.value:
        if p.status != PostStatus.PUBLISHED.value or p.published_at is None:
            p.published_at = utcnow()
    else:
        p.published_at = None
    p.status = status


def _replace_tags(post_id: int, tag_ids: list[int]) -> None:
    previous = get_post_tag_ids(post_id)
    clear_post_tags(post_id)
    add_post_tags(post_id, tag_ids)
    recount_tags(set(previous) | set(tag_ids))


def create_post(payload: PostCreate, author_id: int) -> Post:
    with atomic():
        category_id = _require_category(payload.category_id)
        blocks = _require_content(payload.content_blocks)
        tag_ids = _require_tags(payload.tag_ids or [])

        p = add_post(
            title=payload.title,
            slug=resolve_unique_slug(Post, payload.title),
            excerpt=payload.excerpt or "",
            content_blocks=blocks,
            status=PostStatus.DRAFT.value,
            image=payload.image or None,
            featured=payload.featured,
            author_id=author_id,
            category_id=category_id,
        )
        _apply_status(p, payload.status)
        if tag_ids:
            add_post_tags(p.id, tag_ids)
            recount_tags(tag_ids)
        recount_category_posts(category_id)
    logger.info("post_created", post_id=p.id, slug=p.slug, status=p.status, author_id=author_id)
    return p


def update_post(post_id: int, payload: PostUpdate) -> Post:
    fields = payload.model_fields_set
    with atomic():
        p = get_post_or_404(post_id)

        if payload.title is not None and payload.title != p.title:
            p.slug = resolve_unique_slug(Post, payload.title, exclude_id=p.id)
            p.title = payload.title
        if "excerpt" in fields:
            p.excerpt = payload.excerpt or ""
        if "image" in fields:
            p.image = payload.image or None
        if "content_blocks" in fields:
            p.content_blocks = _require_content(payload.content_blocks)
        if payload.featured is not None:
            p.featured = payload.featured
        if payload.status is not None:
            _apply_status(p, payload.status)

        previous_category_id = p.category_id
        if "category_id" in fields:
            p.category_id = _require_category(payload.category_id)

        if payload.tag_ids is not None:
            _replace_tags(p.id, _require_tags(payload.tag_ids))

        if previous_category_id != p.category_id:
            recount_category_posts(previous_category_id)
        recount_category_posts(p.category_id)
    logger.info("post_updated", post_id=p.id, slug=p.slug, status=p.status)
    return p


def update_post_status(post_id: int, payload: PostStatusUpdate) -> Post:
    with atomic():
        p = get_post_or_404(post_id)
        _apply_status(p, payload.status)
        recount_category_posts(p.category_id)
    logger.info("post_status_changed", post_id=p.id, status=p.status)
    return p


def set_post_featured(post_id: int, payload: PostFeaturedUpdate) -> Post:
    with atomic():
        p = get_post_or_404(post_id)
        p.featured = (not p.featured) if payload.featured is None else payload.featured
    logger.info("post_featured_changed", post_id=p.id, featured=p.featured)
    return p


def delete_post(post_id: int) -> None:
    with atomic():
        p = get_post_or_404(post_id)
        category_id = p.category_id
        tag_ids = get_post_tag_ids(p.id)
        clear_post_tags(p.id)
        _delete_post(p)
        recount_category_posts(category_id)
        recount_tags(tag_ids)
    logger.info("post_deleted", post_id=post_id, category_id=category_id, tags=len(tag_ids))


def view_post(p: Post) -> Post:
    """Count a read of ``p``; only published posts accumulate views."""
    if p.status != PostStatus.PUBLISHED.value:
        return p
    with atomic():
        increment_post_views(p.id)
    return p


def get_post_for_reading(post_id: int) -> Post:
    return view_post(get_post_or_404(post_id))


def get_post_by_slug_for_reading(slug: str) -> Post:
    p = get_post_by_slug(slug)
    if p is None:
        raise NotFoundError("Post not found")
    return view_post(p)


def register_view(post_id: int) -> int:
    with atomic():
        get_post_or_404(post_id)
        views = increment_post_views(post_id)
    return views
