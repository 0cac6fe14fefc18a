from __future__ import annotations

from flask import request

from blogapi.blueprints.api import bp
from blogapi.blueprints.api.responses import (
    READ_LIMIT,
    WRITE_LIMIT,
    page_args,
    pagination,
    parse_body,
    status_arg,
    success,
)
from blogapi.blueprints.api.serializers import serialize_category, serialize_post
from blogapi.decorators import token_required
from blogapi.extensions import limiter
from blogapi.models.blog import PostStatus
from blogapi.repositories.blog import list_categories, list_posts_by_category
from blogapi.schemas.categories import CategoryCreate, CategoryUpdate
from blogapi.services import categories as category_service


@bp.get("/categories")
@limiter.limit(READ_LIMIT)
def get_categories():
    page, limit = page_args()
    search = (request.args.get("search") or "").strip() or None
    cats, total = list_categories(search=search, page=page, per_page=limit)
    return success(
        [serialize_category(c) for c in cats],
        pagination=pagination(total, page, limit),
    )


@bp.get("/categories/<int:category_id>")
@limiter.limit(READ_LIMIT)
def get_category(category_id: int):
    return success(serialize_category(category_service.get_category_or_404(category_id)))


@bp.get("/categories/<int:category_id>/posts")
@limiter.limit(READ_LIMIT)
def get_category_posts(category_id: int):
    category_service.get_category_or_404(category_id)
    page, limit = page_args()
    posts, total = list_posts_by_category(
        category_id, status=status_arg(PostStatus.PUBLISHED.value), page=page, per_page=limit
    )
    return success(
        [serialize_post(p) for p in posts],
        pagination=pagination(total, page, limit),
    )


@bp.post("/categories")
@token_required
@limiter.limit(WRITE_LIMIT)
def create_category():
    cat = category_service.create_category(parse_body(CategoryCreate))
    return success(serialize_category(cat), message="Category created successfully", status=201)


@bp.put("/categories/<int:category_id>")
@token_required
@limiter.limit(WRITE_LIMIT)
def update_category(category_id: int):
    payload = parse_body(CategoryUpdate)
    cat = category_service.update_category(category_id, payload)
    return success(serialize_category(cat), message="Category updated successfully")


@bp.delete("/categories/<int:category_id>")
@token_required
@limiter.limit(WRITE_LIMIT)
def delete_category(category_id: int):
    category_service.delete_category(category_id)
    return success(message="Category deleted successfully")
