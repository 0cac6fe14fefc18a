"""Model to JSON shaping. Keys are camelCase on the wire."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from blogapi.models import Category, NewsletterSubscriber, Post, Tag, User


def iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    # SQLite drops tzinfo; values are always written as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def serialize_user(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "isAdmin": user.is_admin,
        "lastLogin": iso(user.last_login),
    }


def serialize_category(cat: Category) -> dict[str, Any]:
    return {
        "id": cat.id,
        "name": cat.name,
        "slug": cat.slug,
        "description": cat.description,
        "color": cat.color,
        "postsCount": cat.posts_count,
        "createdAt": iso(cat.created_at),
        "updatedAt": iso(cat.updated_at),
    }


def serialize_tag(tag: Tag) -> dict[str, Any]:
    return {
        "id": tag.id,
        "name": tag.name,
        "slug": tag.slug,
        "description": tag.description,
        "color": tag.color,
        "postsCount": tag.posts_count,
        "createdAt": iso(tag.created_at),
        "updatedAt": iso(tag.updated_at),
    }


def serialize_post(p: Post) -> dict[str, Any]:
    data = {
        "id": p.id,
        "title": p.title,
        "slug": p.slug,
        "excerpt": p.excerpt,
        "contentBlocks": p.content_blocks or [],
        "status": p.status,
        "featured": p.featured,
        "image": p.image,
        "views": p.views,
        "authorId": p.author_id,
        "categoryId": p.category_id,
        "publishedAt": iso(p.published_at),
        "createdAt": iso(p.created_at),
        "updatedAt": iso(p.updated_at),
        "author": None,
        "category": None,
        "tags": [{"id": t.id, "name": t.name, "slug": t.slug, "color": t.color} for t in p.tags],
    }
    if p.author is not None:
        data["author"] = {"id": p.author.id, "username": p.author.username, "email": p.author.email}
    if p.category is not None:
        data["category"] = {
            "id": p.category.id,
            "name": p.category.name,
            "slug": p.category.slug,
            "color": p.category.color,
        }
    return data


def serialize_subscriber(sub: NewsletterSubscriber) -> dict[str, Any]:
    return {
        "id": sub.id,
        "email": sub.email,
        "isActive": sub.is_active,
        "subscribedAt": iso(sub.subscribed_at),
        "unsubscribedAt": iso(sub.unsubscribed_at),
    }
