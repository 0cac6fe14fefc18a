from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import String, cast, delete, func, or_, update

from blogapi.extensions import db
from blogapi.models.blog import Category, Post, PostStatus, PostTag, Tag

# Repository functions only stage changes on the session; the calling service
# commits through blogapi.services.transaction.atomic().

POST_SORT_COLUMNS = {
    "createdAt": Post.created_at,
    "publishedAt": Post.published_at,
    "views": Post.views,
    "title": Post.title,
}

TAG_SORT_COLUMNS = {
    "postsCount": (Tag.posts_count.desc(), Tag.name.asc()),
    "name": (Tag.name.asc(),),
    "createdAt": (Tag.created_at.desc(),),
}


def _paginate(stmt, page: int, per_page: int):
    pag = db.paginate(stmt, page=page, per_page=per_page, error_out=False, count=True)
    return list(pag.items), pag.total or 0


# Slug lookups
def slug_taken(model, slug: str, exclude_id: int | None = None) -> bool:
    stmt = db.select(model.id).filter(model.slug == slug)
    if exclude_id is not None:
        stmt = stmt.filter(model.id != exclude_id)
    return db.session.execute(stmt.limit(1)).first() is not None


# Category repositories
def get_category_by_id(category_id: int) -> Optional[Category]:
    return db.session.get(Category, category_id)


def get_category_by_name(name: str) -> Optional[Category]:
    return db.session.execute(db.select(Category).filter_by(name=name)).scalar_one_or_none()


def list_categories(
    search: str | None = None, page: int = 1, per_page: int = 10
) -> tuple[list[Category], int]:
    stmt = db.select(Category)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.filter(or_(Category.name.ilike(pattern), Category.description.ilike(pattern)))
    stmt = stmt.order_by(Category.name.asc())
    return _paginate(stmt, page, per_page)


def add_category(*, name: str, slug: str, description: str | None, color: str) -> Category:
    cat = Category(name=name, slug=slug, description=description, color=color)
    db.session.add(cat)
    db.session.flush()
    return cat


def delete_category(cat: Category) -> None:
    db.session.delete(cat)


# Tag repositories
def get_tag_by_id(tag_id: int) -> Optional[Tag]:
    return db.session.get(Tag, tag_id)


def get_tag_by_slug(slug: str) -> Optional[Tag]:
    return db.session.execute(db.select(Tag).filter_by(slug=slug)).scalar_one_or_none()


def get_tag_by_name(name: str) -> Optional[Tag]:
    return db.session.execute(db.select(Tag).filter_by(name=name)).scalar_one_or_none()


def get_tags_by_ids(tag_ids: Iterable[int]) -> list[Tag]:
    ids = list(tag_ids)
    if not ids:
        return []
    return list(db.session.execute(db.select(Tag).filter(Tag.id.in_(ids))).scalars())


def list_tags(
    search: str | None = None,
    sort_by: str = "postsCount",
    page: int = 1,
    per_page: int = 10,
) -> tuple[list[Tag], int]:
    stmt = db.select(Tag)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.filter(or_(Tag.name.ilike(pattern), Tag.description.ilike(pattern)))
    stmt = stmt.order_by(*TAG_SORT_COLUMNS.get(sort_by, TAG_SORT_COLUMNS["postsCount"]))
    return _paginate(stmt, page, per_page)


def list_popular_tags(limit: int = 10, min_posts: int = 1) -> list[Tag]:
    stmt = (
        db.select(Tag)
        .filter(Tag.posts_count >= min_posts)
        .order_by(Tag.posts_count.desc(), Tag.name.asc())
        .limit(limit)
    )
    return list(db.session.execute(stmt).scalars())


def list_all_tag_ids() -> list[int]:
    return list(db.session.execute(db.select(Tag.id).order_by(Tag.id)).scalars())


def list_all_category_ids() -> list[int]:
    return list(db.session.execute(db.select(Category.id).order_by(Category.id)).scalars())


def add_tag(*, name: str, slug: str, description: str | None, color: str) -> Tag:
    tag = Tag(name=name, slug=slug, description=description, color=color)
    db.session.add(tag)
    db.session.flush()
    return tag


def delete_tag(tag: Tag) -> None:
    db.session.delete(tag)


# Association repositories
def get_post_tag(post_id: int, tag_id: int) -> Optional[PostTag]:
    return db.session.get(PostTag, (post_id, tag_id))


def get_post_tag_ids(post_id: int) -> list[int]:
    stmt = db.select(PostTag.tag_id).filter_by(post_id=post_id)
    return list(db.session.execute(stmt).scalars())


def add_post_tags(post_id: int, tag_ids: Iterable[int]) -> None:
    for tag_id in dict.fromkeys(tag_ids):
        db.session.add(PostTag(post_id=post_id, tag_id=tag_id))
    db.session.flush()


def remove_post_tag(link: PostTag) -> None:
    db.session.delete(link)
    db.session.flush()


def clear_post_tags(post_id: int) -> None:
    db.session.execute(delete(PostTag).where(PostTag.post_id == post_id))


def clear_tag_posts(tag_id: int) -> None:
    db.session.execute(delete(PostTag).where(PostTag.tag_id == tag_id))


# Counting
def count_posts_in_category(category_id: int) -> int:
    stmt = db.select(func.count(Post.id)).filter(Post.category_id == category_id)
    return db.session.execute(stmt).scalar_one()


def count_posts_with_tag(tag_id: int) -> int:
    stmt = db.select(func.count()).select_from(PostTag).filter(PostTag.tag_id == tag_id)
    return db.session.execute(stmt).scalar_one()


def set_category_posts_count(category_id: int, count: int) -> None:
    db.session.execute(update(Category).where(Category.id == category_id).values(posts_count=count))


def set_tag_posts_count(tag_id: int, count: int) -> None:
    db.session.execute(update(Tag).where(Tag.id == tag_id).values(posts_count=count))


# Post repositories
def get_post_by_id(post_id: int) -> Optional[Post]:
    return db.session.get(Post, post_id)


def get_post_by_slug(slug: str) -> Optional[Post]:
    return db.session.execute(db.select(Post).filter_by(slug=slug)).scalar_one_or_none()


def list_posts(
    *,
    search: str | None = None,
    status: str | None = None,
    category_id: int | None = None,
    featured: bool | None = None,
    sort_by: str = "createdAt",
    sort_order: str = "DESC",
    page: int = 1,
    per_page: int = 10,
) -> tuple[list[Post], int]:
    stmt = db.select(Post)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.filter(
            or_(
                Post.title.ilike(pattern),
                Post.excerpt.ilike(pattern),
                cast(Post.content_blocks, String).ilike(pattern),
            )
        )
    if status:
        stmt = stmt.filter(Post.status == status)
    if category_id is not None:
        stmt = stmt.filter(Post.category_id == category_id)
    if featured is not None:
        stmt = stmt.filter(Post.featured.is_(featured))
    column = POST_SORT_COLUMNS.get(sort_by, Post.created_at)
    ordering = column.asc() if sort_order == "ASC" else column.desc()
    stmt = stmt.order_by(ordering, Post.id.desc())
    return _paginate(stmt, page, per_page)


def _recent_first(stmt):
    return stmt.order_by(
        Post.published_at.desc().nulls_last(), Post.created_at.desc(), Post.id.desc()
    )


def list_posts_by_category(
    category_id: int, status: str | None = PostStatus.PUBLISHED.value, page: int = 1, per_page: int = 10
) -> tuple[list[Post], int]:
    stmt = db.select(Post).filter(Post.category_id == category_id)
    if status:
        stmt = stmt.filter(Post.status == status)
    return _paginate(_recent_first(stmt), page, per_page)


def list_posts_by_tag(
    tag_id: int, status: str | None = PostStatus.PUBLISHED.value, page: int = 1, per_page: int = 10
) -> tuple[list[Post], int]:
    stmt = db.select(Post).join(PostTag, PostTag.post_id == Post.id).filter(PostTag.tag_id == tag_id)
    if status:
        stmt = stmt.filter(Post.status == status)
    return _paginate(_recent_first(stmt), page, per_page)


def list_all_posts() -> list[Post]:
    return list(db.session.execute(db.select(Post).order_by(Post.id)).scalars())


def add_post(**fields) -> Post:
    p = Post(**fields)
    db.session.add(p)
    db.session.flush()
    return p


def delete_post(p: Post) -> None:
    db.session.delete(p)


def increment_post_views(post_id: int) -> int | None:
    db.session.execute(update(Post).where(Post.id == post_id).values(views=Post.views + 1))
    return db.session.execute(db.select(Post.views).filter(Post.id == post_id)).scalar_one_or_none()
