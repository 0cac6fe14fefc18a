from __future__ import annotations

import structlog

from blogapi.errors import DuplicateAssociationError, NotFoundError, ReferentialGuardError, ValidationError
from blogapi.models.blog import DEFAULT_COLOR, Tag
from blogapi.repositories.blog import (
    add_post_tags,
    add_tag,
    count_posts_with_tag,
    delete_tag as _delete_tag,
    get_post_by_id,
    get_post_tag,
    get_tag_by_id,
    get_tag_by_name,
    get_tag_by_slug,
    remove_post_tag,
)
from blogapi.schemas.tags import TagCreate, TagUpdate
from blogapi.services.counters import recount_tag_posts
from blogapi.services.slugs import resolve_unique_slug
from blogapi.services.transaction import atomic

logger = structlog.get_logger(__name__)

DUPLICATE_NAME = "A tag with this name already exists"


def get_tag_or_404(tag_id: int) -> Tag:
    tag = get_tag_by_id(tag_id)
    if tag is None:
        raise NotFoundError("Tag not found")
    return tag


def get_tag_by_slug_or_404(slug: str) -> Tag:
    tag = get_tag_by_slug(slug)
    if tag is None:
        raise NotFoundError("Tag not found")
    return tag


def create_tag(payload: TagCreate) -> Tag:
    with atomic():
        if get_tag_by_name(payload.name):
            raise ValidationError(DUPLICATE_NAME)
        tag = add_tag(
            name=payload.name,
            slug=resolve_unique_slug(Tag, payload.name),
            description=payload.description,
            color=payload.color or DEFAULT_COLOR,
        )
    logger.info("tag_created", tag_id=tag.id, slug=tag.slug)
    return tag


def update_tag(tag_id: int, payload: TagUpdate) -> Tag:
    with atomic():
        tag = get_tag_or_404(tag_id)
        existing = get_tag_by_name(payload.name)
        if existing is not None and existing.id != tag.id:
            raise ValidationError(DUPLICATE_NAME)

        if payload.name != tag.name:
            tag.slug = resolve_unique_slug(Tag, payload.name, exclude_id=tag.id)
            tag.name = payload.name
        if "description" in payload.model_fields_set:
            tag.description = payload.description
        if payload.color:
            tag.color = payload.color
    logger.info("tag_updated", tag_id=tag.id, slug=tag.slug)
    return tag


def delete_tag(tag_id: int) -> None:
    with atomic():
        tag = get_tag_or_404(tag_id)
        in_use = count_posts_with_tag(tag.id)
        if in_use > 0:
            raise ReferentialGuardError(
                f"Cannot delete tag: it is used by {in_use} post(s)", in_use
            )
        _delete_tag(tag)
    logger.info("tag_deleted", tag_id=tag_id)


def add_tag_to_post(tag_id: int, post_id: int) -> Tag:
    with atomic():
        tag = get_tag_or_404(tag_id)
        post = get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if get_post_tag(post.id, tag.id) is not None:
            raise DuplicateAssociationError("This tag is already associated with the post")
        add_post_tags(post.id, [tag.id])
        recount_tag_posts(tag.id)
    logger.info("tag_associated", tag_id=tag_id, post_id=post_id)
    return tag


def remove_tag_from_post(tag_id: int, post_id: int) -> Tag:
    with atomic():
        link = get_post_tag(post_id, tag_id)
        if link is None:
            raise NotFoundError("Association between tag and post not found")
        remove_post_tag(link)
        recount_tag_posts(tag_id)
        tag = get_tag_or_404(tag_id)
    logger.info("tag_disassociated", tag_id=tag_id, post_id=post_id)
    return tag
