from __future__ import annotations

import structlog

from blogapi.errors import NotFoundError, ReferentialGuardError, ValidationError
from blogapi.models.blog import DEFAULT_COLOR, Category
from blogapi.repositories.blog import (
    add_category,
    count_posts_in_category,
    delete_category as _delete_category,
    get_category_by_id,
    get_category_by_name,
)
from blogapi.schemas.categories import CategoryCreate, CategoryUpdate
from blogapi.services.transaction import atomic
from blogapi.services.slugs import resolve_unique_slug

logger = structlog.get_logger(__name__)

DUPLICATE_NAME = "A category with this name already exists"


def get_category_or_404(category_id: int) -> Category:
    cat = get_category_by_id(category_id)
    if cat is None:
        raise NotFoundError("Category not found")
    return cat


def create_category(payload: CategoryCreate) -> Category:
    with atomic():
        if get_category_by_name(payload.name):
            raise ValidationError(DUPLICATE_NAME)
        cat = add_category(
            name=payload.name,
            slug=resolve_unique_slug(Category, payload.name),
            description=payload.description,
            color=payload.color or DEFAULT_COLOR,
        )
    logger.info("category_created", category_id=cat.id, slug=cat.slug)
    return cat


def update_category(category_id: int, payload: CategoryUpdate) -> Category:
    with atomic():
        cat = get_category_or_404(category_id)
        existing = get_category_by_name(payload.name)
        if existing is not None and existing.id != cat.id:
            raise ValidationError(DUPLICATE_NAME)

        if payload.name != cat.name:
            cat.slug = resolve_unique_slug(Category, payload.name, exclude_id=cat.id)
            cat.name = payload.name
        if "description" in payload.model_fields_set:
            cat.description = payload.description
        if payload.color:
            cat.color = payload.color
    logger.info("category_updated", category_id=cat.id, slug=cat.slug)
    return cat


def delete_category(category_id: int) -> None:
    with atomic():
        cat = get_category_or_404(category_id)
        # Live count; the stored posts_count may be stale
        in_use = count_posts_in_category(cat.id)
        if in_use > 0:
            raise ReferentialGuardError(
                f"Cannot delete category: it is used by {in_use} post(s)", in_use
            )
        _delete_category(cat)
    logger.info("category_deleted", category_id=category_id)
