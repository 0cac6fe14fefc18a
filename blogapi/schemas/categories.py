from __future__ import annotations

from pydantic import Field, field_validator

from blogapi.schemas.common import ApiModel, clean_color, clean_name, clean_optional_text


class CategoryCreate(ApiModel):
    name: str | None = Field(default=None, validate_default=True)
    description: str | None = None
    color: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        return clean_name(v, "Category")

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return clean_optional_text(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        return clean_color(v)


class CategoryUpdate(CategoryCreate):
    pass
