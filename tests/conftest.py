"""Test configuration and fixtures for the blog API."""

from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.pool import StaticPool

from blogapi import create_app
from blogapi.extensions import db
from blogapi.models import Category, Post, PostStatus, PostTag, Tag, User, utcnow
from blogapi.utils.crypto import hash_password
from blogapi.utils.tokens import create_access_token


@pytest.fixture
def app() -> Generator[Flask, None, None]:
    """Create and configure a test Flask application."""
    # Use in-memory SQLite for each test
    test_config = {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SQLALCHEMY_ENGINE_OPTIONS': {
            'poolclass': StaticPool,
            'pool_pre_ping': True,
            'connect_args': {'check_same_thread': False}
        },
        'SECRET_KEY': 'test-secret-key',
        'RATELIMIT_ENABLED': False,  # Disable rate limiting for tests
        'PUBLIC_BASE_URL': 'https://api.blog.com',
    }

    app = create_app(test_config)

    with app.app_context():
        db.create_all()
        yield app

        # Cleanup
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def runner(app: Flask):
    """Create a test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture(autouse=True)
def db_session(app: Flask):
    """Create a clean database session for each test."""
    with app.app_context():
        yield db.session


@pytest.fixture
def test_admin_user(app: Flask):
    """Create a test admin user."""
    with app.app_context():
        admin_user = User(
            username='testadmin',
            email='admin@blog.com',
            password_hash=hash_password('adminpassword'),
            is_admin=True,
        )
        db.session.add(admin_user)
        db.session.commit()
        db.session.refresh(admin_user)
        yield admin_user


@pytest.fixture
def auth_headers(app: Flask, test_admin_user: User) -> dict:
    """Bearer token headers for the admin user."""
    with app.app_context():
        token = create_access_token(test_admin_user.id, test_admin_user.username)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def test_category(app: Flask):
    """Create a test category."""
    with app.app_context():
        category = Category(
            name='Test Category',
            slug='test-category',
            description='A test category',
            color='#3B82F6',
        )
        db.session.add(category)
        db.session.commit()
        db.session.refresh(category)
        yield category


@pytest.fixture
def test_tag(app: Flask):
    """Create a test tag."""
    with app.app_context():
        tag = Tag(name='Python', slug='python', description='Python posts', color='#10B981')
        db.session.add(tag)
        db.session.commit()
        db.session.refresh(tag)
        yield tag


def paragraph(text: str = 'This is a test post content.', order: int = 0) -> dict:
    return {'type': 'paragraph', 'content': text, 'order': order}


@pytest.fixture
def make_post(app: Flask, test_category: Category, test_admin_user: User):
    """Factory inserting posts directly, bypassing the service layer."""

    def _make(title: str = 'Test Post', slug: str | None = None, status: str = PostStatus.DRAFT.value,
              category: Category | None = None, tags: list[Tag] | None = None, **fields) -> Post:
        published_at = utcnow() if status == PostStatus.PUBLISHED.value else None
        post = Post(
            title=title,
            slug=slug or title.lower().replace(' ', '-'),
            excerpt=fields.pop('excerpt', 'Test post excerpt'),
            content_blocks=fields.pop('content_blocks', [paragraph()]),
            status=status,
            published_at=published_at,
            category_id=(category or test_category).id,
            author_id=test_admin_user.id,
            **fields,
        )
        db.session.add(post)
        db.session.flush()
        for tag in tags or []:
            db.session.add(PostTag(post_id=post.id, tag_id=tag.id))
        db.session.commit()
        db.session.refresh(post)
        return post

    return _make


@pytest.fixture
def test_post(make_post) -> Post:
    """Create a test blog post."""
    return make_post()
