from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import func

from blogapi.extensions import db
from blogapi.models.newsletter import NewsletterSubscriber


def get_subscriber_by_email(email: str) -> Optional[NewsletterSubscriber]:
    stmt = db.select(NewsletterSubscriber).filter_by(email=email)
    return db.session.execute(stmt).scalar_one_or_none()


def add_subscriber(email: str) -> NewsletterSubscriber:
    sub = NewsletterSubscriber(email=email, is_active=True)
    db.session.add(sub)
    db.session.flush()
    return sub


def list_subscribers(
    is_active: bool | None = None, page: int = 1, per_page: int = 50
) -> tuple[list[NewsletterSubscriber], int]:
    stmt = db.select(NewsletterSubscriber)
    if is_active is not None:
        stmt = stmt.filter(NewsletterSubscriber.is_active.is_(is_active))
    stmt = stmt.order_by(NewsletterSubscriber.subscribed_at.desc(), NewsletterSubscriber.id.desc())
    pag = db.paginate(stmt, page=page, per_page=per_page, error_out=False, count=True)
    return list(pag.items), pag.total or 0


def count_subscribers(is_active: bool | None = None, since: datetime | None = None) -> int:
    stmt = db.select(func.count(NewsletterSubscriber.id))
    if is_active is not None:
        stmt = stmt.filter(NewsletterSubscriber.is_active.is_(is_active))
    if since is not None:
        stmt = stmt.filter(NewsletterSubscriber.subscribed_at >= since)
    return db.session.execute(stmt).scalar_one()
