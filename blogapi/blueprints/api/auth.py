from __future__ import annotations

from flask import current_app
from flask_login import current_user

from blogapi.blueprints.api import bp
from blogapi.blueprints.api.responses import LOGIN_LIMIT, failure, parse_body, success
from blogapi.blueprints.api.serializers import serialize_user
from blogapi.decorators import token_required
from blogapi.extensions import limiter
from blogapi.schemas.auth import LoginRequest
from blogapi.services.auth import authenticate
from blogapi.utils.tokens import create_access_token


@bp.post("/auth/login")
@limiter.limit(LOGIN_LIMIT)
def login():
    payload = parse_body(LoginRequest)
    user, error = authenticate(payload.username, payload.password)
    if user is None:
        return failure(error or "Invalid username or password", 401)
    token = create_access_token(user.id, user.username)
    return success(
        {
            "token": token,
            "tokenType": "Bearer",
            "expiresIn": current_app.config["ACCESS_TOKEN_EXPIRE_MINUTES"] * 60,
            "user": serialize_user(user),
        },
        message="Login successful",
    )


@bp.get("/auth/verify-token")
@token_required
def verify_token():
    return success({"user": serialize_user(current_user)})
