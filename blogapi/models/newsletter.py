from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from blogapi.extensions import db
from blogapi.models import utcnow


class NewsletterSubscriber(db.Model):
    __tablename__ = "newsletter_subscribers"

    id: Mapped[int] = mapped_column(primary_key=True)
    # Always stored lower-cased
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(db.Boolean, nullable=False, default=True, index=True)
    subscribed_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    unsubscribed_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), onupdate=utcnow)
