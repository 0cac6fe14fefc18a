from __future__ import annotations

from flask import request

from blogapi.blueprints.api import bp
from blogapi.blueprints.api.responses import (
    NEWSLETTER_LIMIT,
    READ_LIMIT,
    page_args,
    pagination,
    parse_body,
    success,
)
from blogapi.blueprints.api.serializers import iso, serialize_subscriber
from blogapi.decorators import token_required
from blogapi.extensions import limiter
from blogapi.repositories.newsletter import list_subscribers
from blogapi.schemas.newsletter import SubscriptionRequest
from blogapi.services import newsletter as newsletter_service

SUBSCRIBERS_PAGE_SIZE = 50


@bp.post("/newsletter/subscribe")
@limiter.limit(NEWSLETTER_LIMIT)
def subscribe():
    payload = parse_body(SubscriptionRequest)
    sub, created = newsletter_service.subscribe(payload.email)
    data = {"id": sub.id, "email": sub.email, "subscribedAt": iso(sub.subscribed_at)}
    if created:
        return success(data, message="Subscribed to the newsletter successfully", status=201)
    return success(data, message="Subscription reactivated successfully")


@bp.post("/newsletter/unsubscribe")
@limiter.limit(NEWSLETTER_LIMIT)
def unsubscribe():
    payload = parse_body(SubscriptionRequest)
    newsletter_service.unsubscribe(payload.email)
    return success(message="Unsubscribed successfully")


@bp.get("/newsletter/check/<path:email>")
@limiter.limit(READ_LIMIT)
def check_subscription(email: str):
    sub = newsletter_service.check_subscription(email)
    if sub is None:
        return success({"isSubscribed": False, "email": email.strip().lower()})
    return success(
        {
            "isSubscribed": sub.is_active,
            "email": sub.email,
            "subscribedAt": iso(sub.subscribed_at),
            "unsubscribedAt": iso(sub.unsubscribed_at),
        }
    )


@bp.get("/newsletter/subscribers")
@token_required
def get_subscribers():
    page, limit = page_args(default_limit=SUBSCRIBERS_PAGE_SIZE)
    status = request.args.get("status")
    is_active = {"active": True, "inactive": False}.get(status)
    subs, total = list_subscribers(is_active=is_active, page=page, per_page=limit)
    return success(
        [serialize_subscriber(s) for s in subs],
        pagination=pagination(total, page, limit),
    )


@bp.get("/newsletter/stats")
@token_required
def get_stats():
    stats = newsletter_service.subscription_stats()
    return success(
        {
            "totalSubscribers": stats["total"],
            "activeSubscribers": stats["active"],
            "inactiveSubscribers": stats["inactive"],
            "recentSubscriptions": stats["recent"],
            "lastUpdated": iso(stats["last_updated"]),
        }
    )
