from __future__ import annotations

from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blogapi.extensions import db
from blogapi.models import utcnow


class User(db.Model, UserMixin):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(db.String(50), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    is_admin: Mapped[bool] = mapped_column(db.Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    last_login: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), nullable=True)

    # Login lockout tracking
    failed_login_attempts: Mapped[int] = mapped_column(db.Integer, default=0, nullable=False)
    login_locked_until: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), nullable=True)

    posts: Mapped[list["Post"]] = relationship(back_populates="author")

    def get_id(self) -> str:  # Flask-Login compatibility
        return str(self.id)
