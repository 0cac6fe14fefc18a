from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict

import structlog
from flask import Flask, g, request
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from blogapi.config import Config
from blogapi.errors import ApiError, AuthenticationError
from blogapi.extensions import db, limiter, login_manager
from blogapi.logging_config import configure_logging
from blogapi.security import apply_security_headers

logger = structlog.get_logger(__name__)

HTTP_MESSAGES = {
    400: "Bad request",
    401: "Authentication required",
    404: "Resource not found",
    405: "Method not allowed",
    413: "Request body too large",
    429: "Too many requests, please try again later",
}


def _describe_validation_error(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    # Messages raised from our own validators are already phrased for clients
    cause = (err.get("ctx") or {}).get("error")
    if err["type"] == "value_error" and isinstance(cause, ValueError):
        return str(cause)
    field = ".".join(str(part) for part in err["loc"])
    return f"{field}: {err['msg']}" if field else err["msg"]


def create_app(config_overrides: Dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=False)

    # Load config
    app.config.from_object(Config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(logging.DEBUG if app.debug else app.config["LOG_LEVEL"])

    # Init extensions
    db.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)

    from blogapi.blueprints.api.responses import failure
    from blogapi.models.user import User
    from blogapi.utils.db_retry import safe_db_operation
    from blogapi.utils.tokens import decode_access_token, extract_bearer_token

    # Bearer tokens replace the session cookie for every API call
    @login_manager.request_loader
    def load_user_from_request(req) -> User | None:
        token = extract_bearer_token(req.headers.get("Authorization"))
        if token is None:
            return None
        try:
            user_id = decode_access_token(token)
        except AuthenticationError as e:
            logger.info("token_rejected", reason=e.message)
            return None
        return safe_db_operation(db.session.get, User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return failure("Invalid or missing authentication token", 401)

    # Warn at startup when nobody can log in
    with app.app_context():
        from blogapi.utils.admin_setup import ensure_admin_user
        ensure_admin_user()

    @app.before_request
    def add_request_context() -> None:
        g.request_id = request.headers.get("X-Request-ID") or os.urandom(8).hex()
        g.request_started = time.perf_counter()
        # Identity comes from this request's bearer token only
        g.pop("_login_user", None)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=g.request_id)

    @app.after_request
    def finish_request(resp):
        started = getattr(g, "request_started", None)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.path,
            status=resp.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2) if started else None,
        )
        if getattr(g, "request_id", None):
            resp.headers["X-Request-ID"] = g.request_id
        return apply_security_headers(resp)

    @app.teardown_request
    def clear_request_context(exc) -> None:
        # Startup and CLI logging must not inherit the last caller's bindings
        structlog.contextvars.clear_contextvars()

    # Blueprints
    from blogapi.blueprints.api import bp as api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    # Health route
    @app.get("/api/health")
    def health():
        try:
            db.session.execute(db.text("SELECT 1"))
            db_ok = "connected"
        except Exception:
            logger.exception("health_db_check_failed")
            db_ok = "error"
        return {"success": True, "data": {"status": "ok", "db": db_ok}}, 200

    # Error handlers (JSON envelope)
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        if e.status_code >= 500:
            logger.error("api_error", message=e.message, status=e.status_code)
        return failure(e.message, e.status_code)

    @app.errorhandler(PydanticValidationError)
    def handle_validation_error(e: PydanticValidationError):
        return failure(_describe_validation_error(e), 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return failure(HTTP_MESSAGES.get(e.code, e.description or "Request failed"), e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        logger.exception("unhandled_error", error_type=type(e).__name__)
        return failure("Internal server error", 500)

    from blogapi.cli import register_commands

    register_commands(app)

    return app
