from __future__ import annotations

import logging

import structlog
from flask import g, has_app_context


def configure_logging(level: int | str = logging.INFO) -> None:
    if isinstance(level, str):
        # Unknown names fall back to INFO
        level = getattr(logging, level.upper(), logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            add_request_id,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def add_request_id(logger, method_name, event_dict):
    """Attach the current request id to events logged outside bound context."""
    if not has_app_context():
        return event_dict
    req_id = getattr(g, "request_id", None)
    if req_id:
        event_dict.setdefault("request_id", req_id)
    return event_dict
