from __future__ import annotations

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# SQLAlchemy 2.0 style

db: SQLAlchemy = SQLAlchemy()
login_manager: LoginManager = LoginManager()

# Rate limiter (IP-based)
limiter: Limiter = Limiter(key_func=get_remote_address)
