from __future__ import annotations

from flask import request
from flask_login import current_user

from blogapi.blueprints.api import bp
from blogapi.blueprints.api.responses import (
    READ_LIMIT,
    WRITE_LIMIT,
    bool_arg,
    page_args,
    pagination,
    parse_body,
    status_arg,
    success,
)
from blogapi.blueprints.api.serializers import iso, serialize_post
from blogapi.decorators import token_required
from blogapi.extensions import limiter
from blogapi.models.blog import PostStatus
from blogapi.repositories.blog import POST_SORT_COLUMNS, list_posts, list_posts_by_tag
from blogapi.schemas.posts import PostCreate, PostFeaturedUpdate, PostStatusUpdate, PostUpdate
from blogapi.services import posts as post_service
from blogapi.services.tags import get_tag_or_404


@bp.get("/posts")
@limiter.limit(READ_LIMIT)
def get_posts():
    page, limit = page_args()
    sort_by = request.args.get("sortBy", "createdAt")
    if sort_by not in POST_SORT_COLUMNS:
        sort_by = "createdAt"
    sort_order = "ASC" if request.args.get("sortOrder", "DESC").upper() == "ASC" else "DESC"
    posts, total = list_posts(
        search=(request.args.get("search") or "").strip() or None,
        status=status_arg(),
        category_id=request.args.get("categoryId", type=int),
        featured=bool_arg("featured"),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        per_page=limit,
    )
    return success(
        [serialize_post(p) for p in posts],
        pagination=pagination(total, page, limit),
    )


@bp.get("/posts/<int:post_id>")
@limiter.limit(READ_LIMIT)
def get_post(post_id: int):
    return success(serialize_post(post_service.get_post_for_reading(post_id)))


@bp.get("/posts/slug/<slug>")
@limiter.limit(READ_LIMIT)
def get_post_by_slug(slug: str):
    return success(serialize_post(post_service.get_post_by_slug_for_reading(slug)))


@bp.get("/posts/tag/<int:tag_id>")
@limiter.limit(READ_LIMIT)
def get_posts_by_tag(tag_id: int):
    get_tag_or_404(tag_id)
    page, limit = page_args()
    posts, total = list_posts_by_tag(
        tag_id, status=status_arg(PostStatus.PUBLISHED.value), page=page, per_page=limit
    )
    return success(
        [serialize_post(p) for p in posts],
        pagination=pagination(total, page, limit),
    )


@bp.patch("/posts/<int:post_id>/views")
@limiter.limit(READ_LIMIT)
def increment_views(post_id: int):
    views = post_service.register_view(post_id)
    return success({"id": post_id, "views": views})


@bp.post("/posts")
@token_required
@limiter.limit(WRITE_LIMIT)
def create_post():
    p = post_service.create_post(parse_body(PostCreate), author_id=current_user.id)
    return success(serialize_post(p), message="Post created successfully", status=201)


@bp.put("/posts/<int:post_id>")
@token_required
@limiter.limit(WRITE_LIMIT)
def update_post(post_id: int):
    p = post_service.update_post(post_id, parse_body(PostUpdate))
    return success(serialize_post(p), message="Post updated successfully")


@bp.delete("/posts/<int:post_id>")
@token_required
@limiter.limit(WRITE_LIMIT)
def delete_post(post_id: int):
    post_service.delete_post(post_id)
    return success(message="Post deleted successfully")


@bp.put("/posts/<int:post_id>/status")
@token_required
@limiter.limit(WRITE_LIMIT)
def update_post_status(post_id: int):
    p = post_service.update_post_status(post_id, parse_body(PostStatusUpdate))
    return success(
        {"id": p.id, "status": p.status, "publishedAt": iso(p.published_at)},
        message="Post status updated successfully",
    )


@bp.put("/posts/<int:post_id>/featured")
@token_required
@limiter.limit(WRITE_LIMIT)
def update_post_featured(post_id: int):
    p = post_service.set_post_featured(post_id, parse_body(PostFeaturedUpdate))
    return success({"id": p.id, "featured": p.featured}, message="Post featured flag updated")
