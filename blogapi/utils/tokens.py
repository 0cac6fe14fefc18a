"""Bearer token issuing and verification."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from flask import current_app
from jose import JWTError, jwt

from blogapi.errors import AuthenticationError

TOKEN_TYPE = "access"


def create_access_token(user_id: int, username: str, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed access token for ``user_id``.

    Args:
        user_id: Primary key of the authenticated user
        username: Username, carried for log correlation only
        expires_delta: Optional lifetime override

    Returns:
        str: Encoded JWT
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=current_app.config["ACCESS_TOKEN_EXPIRE_MINUTES"])

    claims = {
        "sub": str(user_id),
        "username": username,
        "iat": now,
        "exp": now + expires_delta,
        "type": TOKEN_TYPE,
    }
    return jwt.encode(claims, current_app.config["SECRET_KEY"], algorithm=current_app.config["JWT_ALGORITHM"])


def decode_access_token(token: str) -> int:
    """Return the user id encoded in ``token`` or raise AuthenticationError."""
    try:
        claims = jwt.decode(
            token,
            current_app.config["SECRET_KEY"],
            algorithms=[current_app.config["JWT_ALGORITHM"]],
        )
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e

    if claims.get("type") != TOKEN_TYPE:
        raise AuthenticationError("Invalid token type")
    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise AuthenticationError("Invalid token subject") from e


def extract_bearer_token(header_value: str | None) -> str | None:
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
