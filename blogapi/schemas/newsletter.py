from __future__ import annotations

from pydantic import EmailStr, field_validator

from blogapi.schemas.common import ApiModel


class SubscriptionRequest(ApiModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()
