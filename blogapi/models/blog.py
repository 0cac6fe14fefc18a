from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blogapi.extensions import db
from blogapi.models import utcnow

DEFAULT_COLOR = "#3B82F6"


class PostStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


class Category(db.Model):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(db.String(100), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(db.Text, nullable=True)
    color: Mapped[str] = mapped_column(db.String(7), nullable=False, default=DEFAULT_COLOR)
    # Denormalized; recomputed by blogapi.services.counters
    posts_count: Mapped[int] = mapped_column(db.Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), onupdate=utcnow)

    posts: Mapped[list["Post"]] = relationship(back_populates="category")

    __table_args__ = (
        CheckConstraint("posts_count >= 0", name="ck_categories_posts_count"),
    )


class Tag(db.Model):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(db.String(100), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(db.Text, nullable=True)
    color: Mapped[str | None] = mapped_column(db.String(7), nullable=True, default=DEFAULT_COLOR)
    # Denormalized count of post_tags rows
    posts_count: Mapped[int] = mapped_column(db.Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), onupdate=utcnow)

    posts: Mapped[list["Post"]] = relationship(
        secondary="post_tags", viewonly=True
    )

    __table_args__ = (
        CheckConstraint("posts_count >= 0", name="ck_tags_posts_count"),
        Index("ix_tags_posts_count", "posts_count"),
    )


class Post(db.Model):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(db.String(200), nullable=False)
    slug: Mapped[str] = mapped_column(db.String(200), unique=True, nullable=False, index=True)
    excerpt: Mapped[str | None] = mapped_column(db.Text, nullable=True)
    content_blocks: Mapped[list[dict]] = mapped_column(db.JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        db.String(20), nullable=False, default=PostStatus.DRAFT.value, index=True
    )
    featured: Mapped[bool] = mapped_column(db.Boolean, nullable=False, default=False)
    image: Mapped[str | None] = mapped_column(db.Text, nullable=True)
    views: Mapped[int] = mapped_column(db.Integer, nullable=False, default=0)
    author_id: Mapped[int] = mapped_column(db.ForeignKey("users.id"), nullable=False, index=True)
    category_id: Mapped[int] = mapped_column(db.ForeignKey("categories.id"), nullable=False, index=True)
    published_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), onupdate=utcnow)

    author: Mapped["User"] = relationship(back_populates="posts")
    category: Mapped[Category] = relationship(back_populates="posts")
    tags: Mapped[list[Tag]] = relationship(
        secondary="post_tags", viewonly=True, order_by="Tag.name"
    )

    __table_args__ = (
        CheckConstraint("views >= 0", name="ck_posts_views"),
    )


class PostTag(db.Model):
    __tablename__ = "post_tags"

    post_id: Mapped[int] = mapped_column(
        db.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    tag_id: Mapped[int] = mapped_column(
        db.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)
