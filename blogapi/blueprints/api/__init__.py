from __future__ import annotations

from flask import Blueprint

bp = Blueprint("api", __name__)

# Route modules attach their views to ``bp`` on import
from blogapi.blueprints.api import auth, categories, newsletter, posts, tags  # noqa: E402,F401

