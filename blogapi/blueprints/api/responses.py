"""Response envelope and query string helpers shared by the API views."""
from __future__ import annotations

import math
from typing import Any, Type, TypeVar

from flask import current_app, jsonify, request
from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)

READ_LIMIT = "120 per minute"
WRITE_LIMIT = "10 per minute; 150 per hour"
NEWSLETTER_LIMIT = "5 per minute"
LOGIN_LIMIT = "5 per minute; 20 per hour"


def success(data: Any = None, message: str | None = None, status: int = 200, pagination: dict | None = None):
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if pagination is not None:
        body["pagination"] = pagination
    return jsonify(body), status


def failure(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def pagination(total: int, page: int, limit: int) -> dict:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if limit else 0,
    }


def page_args(default_limit: int | None = None) -> tuple[int, int]:
    """Read ``page``/``limit`` from the query string, clamped to sane bounds."""
    if default_limit is None:
        default_limit = current_app.config.get("DEFAULT_PAGE_SIZE", 10)
    max_limit = current_app.config.get("MAX_PAGE_SIZE", 100)
    page = request.args.get("page", 1, type=int) or 1
    limit = request.args.get("limit", default_limit, type=int) or default_limit
    return max(page, 1), min(max(limit, 1), max_limit)


def status_arg(default: str | None = None) -> str | None:
    """``status`` query filter; ``all`` (or empty) disables it."""
    value = request.args.get("status", default)
    if not value or value == "all":
        return None
    return value


def bool_arg(name: str) -> bool | None:
    value = request.args.get(name)
    if value is None or value == "":
        return None
    return value.lower() == "true"


def parse_body(schema: Type[M]) -> M:
    """Validate the JSON body against ``schema``; pydantic errors become 400s."""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    return schema.model_validate(payload)
