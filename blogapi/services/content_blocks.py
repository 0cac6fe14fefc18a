from __future__ import annotations

import time
import math
from numbers import Number
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from blogapi.errors import ContentBlockError, ValidationError
from blogapi.schemas.content_blocks import BLOCK_TYPES, content_block_adapter


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Number):
        return False
    return math.isfinite(value)


def _describe(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    field = ".".join(str(part) for part in err["loc"][1:]) or "block"
    return f"invalid {field} ({err['msg']})"


def validate_content_blocks(blocks: Any) -> list[dict]:
    """Validate a post body and return its blocks sorted by ``order``.

    Errors name the first offending block, counted from 1 in sorted order.
    Blocks without an id get one of the form ``block_<ms>_<position>``.
    """
    if not isinstance(blocks, list):
        raise ValidationError("Content blocks must be an array")

    for index, block in enumerate(blocks, start=1):
        if not isinstance(block, dict):
            raise ContentBlockError(index, "must be an object")
        if not _is_number(block.get("order")):
            raise ContentBlockError(index, "order must be a number")

    ordered = sorted(blocks, key=lambda b: b["order"])
    stamp = int(time.time() * 1000)

    validated = []
    for position, block in enumerate(ordered, start=1):
        block_type = block.get("type")
        if not block_type:
            raise ContentBlockError(position, "type is required")
        if block_type not in BLOCK_TYPES:
            raise ContentBlockError(position, f"unknown type '{block_type}'")
        content = block.get("content")
        if not isinstance(content, str) or not content.strip():
            raise ContentBlockError(position, "content is required")

        data = dict(block)
        data["id"] = str(data["id"]) if data.get("id") else f"block_{stamp}_{position}"
        if data.get("metadata") is None:
            data.pop("metadata", None)
        elif not isinstance(data["metadata"], dict):
            raise ContentBlockError(position, "metadata must be an object")

        try:
            model = content_block_adapter.validate_python(data)
        except PydanticValidationError as exc:
            raise ContentBlockError(position, _describe(exc)) from exc
        validated.append(model.model_dump(by_alias=True, exclude_none=True))
    return validated
