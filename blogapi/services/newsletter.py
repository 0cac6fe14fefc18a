from __future__ import annotations

from datetime import timedelta

import structlog

from blogapi.errors import ConflictError, NotFoundError
from blogapi.models import utcnow
from blogapi.models.newsletter import NewsletterSubscriber
from blogapi.repositories.newsletter import (
    add_subscriber,
    count_subscribers,
    get_subscriber_by_email,
)
from blogapi.services.transaction import atomic

logger = structlog.get_logger(__name__)

RECENT_DAYS = 30


def subscribe(email: str) -> tuple[NewsletterSubscriber, bool]:
    """Subscribe ``email`` (already lower-cased).

    Returns ``(subscriber, created)``. A previously unsubscribed address is
    reactivated in place, keeping its original ``subscribed_at``.
    """
    with atomic():
        sub = get_subscriber_by_email(email)
        if sub is None:
            sub = add_subscriber(email)
            created = True
        elif sub.is_active:
            raise ConflictError("This email is already subscribed to the newsletter")
        else:
            sub.is_active = True
            sub.unsubscribed_at = None
            created = False
    logger.info("newsletter_subscribed", subscriber_id=sub.id, reactivated=not created)
    return sub, created


def unsubscribe(email: str) -> NewsletterSubscriber:
    with atomic():
        sub = get_subscriber_by_email(email)
        if sub is None:
            raise NotFoundError("Email not found in the newsletter")
        if not sub.is_active:
            raise ConflictError("This email has already been unsubscribed")
        sub.is_active = False
        sub.unsubscribed_at = utcnow()
    logger.info("newsletter_unsubscribed", subscriber_id=sub.id)
    return sub


def check_subscription(email: str) -> NewsletterSubscriber | None:
    return get_subscriber_by_email(email.strip().lower())


def subscription_stats() -> dict:
    since = utcnow() - timedelta(days=RECENT_DAYS)
    return {
        "total": count_subscribers(),
        "active": count_subscribers(is_active=True),
        "inactive": count_subscribers(is_active=False),
        "recent": count_subscribers(since=since),
        "last_updated": utcnow(),
    }
