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
from blogapi.blueprints.api.serializers import serialize_post, serialize_tag
from blogapi.decorators import token_required
from blogapi.extensions import limiter
from blogapi.models.blog import PostStatus
from blogapi.repositories.blog import TAG_SORT_COLUMNS, list_popular_tags, list_posts_by_tag, list_tags
from blogapi.schemas.tags import TagCreate, TagUpdate
from blogapi.services import tags as tag_service


@bp.get("/tags")
@limiter.limit(READ_LIMIT)
def get_tags():
    page, limit = page_args()
    search = (request.args.get("search") or "").strip() or None
    sort_by = request.args.get("sortBy", "postsCount")
    if sort_by not in TAG_SORT_COLUMNS:
        sort_by = "postsCount"
    tags, total = list_tags(search=search, sort_by=sort_by, page=page, per_page=limit)
    return success(
        [serialize_tag(t) for t in tags],
        pagination=pagination(total, page, limit),
    )


@bp.get("/tags/popular")
@limiter.limit(READ_LIMIT)
def get_popular_tags():
    limit = min(max(request.args.get("limit", 10, type=int) or 10, 1), 100)
    min_posts = max(request.args.get("minPosts", 1, type=int) or 0, 0)
    return success([serialize_tag(t) for t in list_popular_tags(limit=limit, min_posts=min_posts)])


@bp.get("/tags/<int:tag_id>")
@limiter.limit(READ_LIMIT)
def get_tag(tag_id: int):
    return success(serialize_tag(tag_service.get_tag_or_404(tag_id)))


@bp.get("/tags/slug/<slug>")
@limiter.limit(READ_LIMIT)
def get_tag_by_slug(slug: str):
    return success(serialize_tag(tag_service.get_tag_by_slug_or_404(slug)))


@bp.get("/tags/<int:tag_id>/posts")
@limiter.limit(READ_LIMIT)
def get_tag_posts(tag_id: int):
    tag_service.get_tag_or_404(tag_id)
    page, limit = page_args()
    posts, total = list_posts_by_tag(
        tag_id, status=status_arg(PostStatus.PUBLISHED.value), page=page, per_page=limit
    )
    return success(
        [serialize_post(p) for p in posts],
        pagination=pagination(total, page, limit),
    )


@bp.post("/tags")
@token_required
@limiter.limit(WRITE_LIMIT)
def create_tag():
    tag = tag_service.create_tag(parse_body(TagCreate))
    return success(serialize_tag(tag), message="Tag created successfully", status=201)


@bp.put("/tags/<int:tag_id>")
@token_required
@limiter.limit(WRITE_LIMIT)
def update_tag(tag_id: int):
    tag = tag_service.update_tag(tag_id, parse_body(TagUpdate))
    return success(serialize_tag(tag), message="Tag updated successfully")


@bp.delete("/tags/<int:tag_id>")
@token_required
@limiter.limit(WRITE_LIMIT)
def delete_tag(tag_id: int):
    tag_service.delete_tag(tag_id)
    return success(message="Tag deleted successfully")


@bp.post("/tags/<int:tag_id>/posts/<int:post_id>")
@token_required
@limiter.limit(WRITE_LIMIT)
def add_tag_to_post(tag_id: int, post_id: int):
    tag = tag_service.add_tag_to_post(tag_id, post_id)
    return success(
        {"tagId": tag.id, "postId": post_id, "postsCount": tag.posts_count},
        message="Tag added to post successfully",
        status=201,
    )


@bp.delete("/tags/<int:tag_id>/posts/<int:post_id>")
@token_required
@limiter.limit(WRITE_LIMIT)
def remove_tag_from_post(tag_id: int, post_id: int):
    tag = tag_service.remove_tag_from_post(tag_id, post_id)
    return success(
        {"tagId": tag.id, "postId": post_id, "postsCount": tag.posts_count},
        message="Tag removed from post successfully",
    )
