from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


class ApiModel(BaseModel):
    """Request payload base: accepts camelCase keys as well as snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def clean_name(value: str | None, label: str, max_length: int = 100) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{label} name is required")
    value = value.strip()
    if len(value) > max_length:
        raise ValueError(f"{label} name must be at most {max_length} characters")
    return value


def clean_color(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    if not HEX_COLOR.match(value):
        raise ValueError("Color must be a hex value like #RRGGBB")
    return value


def clean_optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip()
