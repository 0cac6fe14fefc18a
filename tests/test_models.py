"""Tests for database models."""

import pytest
from sqlalchemy.exc import IntegrityError

from blogapi.extensions import db
from blogapi.models import Category, NewsletterSubscriber, Post, PostStatus, PostTag, Tag, User
from blogapi.models.blog import DEFAULT_COLOR
from blogapi.utils.crypto import hash_password


class TestUser:
    """Test cases for User model."""

    def test_user_creation_defaults(self, app):
        with app.app_context():
            user = User(
                username='newuser',
                email='newuser@blog.com',
                password_hash=hash_password('password123'),
            )
            db.session.add(user)
            db.session.commit()

            assert user.id is not None
            assert user.is_admin is False
            assert user.failed_login_attempts == 0
            assert user.login_locked_until is None
            assert user.created_at is not None
            assert user.get_id() == str(user.id)

    def test_username_unique(self, app, test_admin_user):
        with app.app_context():
            db.session.add(User(username='testadmin', email='other@blog.com', password_hash='x'))
            with pytest.raises(IntegrityError):
                db.session.commit()
            db.session.rollback()


class TestCategory:
    """Test cases for Category model."""

    def test_defaults(self, app):
        with app.app_context():
            cat = Category(name='News', slug='news')
            db.session.add(cat)
            db.session.commit()
            assert cat.color == DEFAULT_COLOR
            assert cat.posts_count == 0
            assert cat.created_at is not None

    def test_slug_unique(self, app, test_category):
        with app.app_context():
            db.session.add(Category(name='Another', slug='test-category'))
            with pytest.raises(IntegrityError):
                db.session.commit()
            db.session.rollback()

    def test_name_unique(self, app, test_category):
        with app.app_context():
            db.session.add(Category(name='Test Category', slug='other-slug'))
            with pytest.raises(IntegrityError):
                db.session.commit()
            db.session.rollback()


class TestPost:
    """Test cases for Post model."""

    def test_defaults(self, app, test_category, test_admin_user):
        with app.app_context():
            post = Post(
                title='Defaults',
                slug='defaults',
                content_blocks=[{'type': 'paragraph', 'content': 'x', 'order': 0}],
                category_id=test_category.id,
                author_id=test_admin_user.id,
            )
            db.session.add(post)
            db.session.commit()
            assert post.status == PostStatus.DRAFT.value
            assert post.views == 0
            assert post.featured is False
            assert post.published_at is None

    def test_relationships(self, app, make_post, test_tag):
        with app.app_context():
            post = make_post(tags=[test_tag])
            post = db.session.get(Post, post.id)
            assert post.category.slug == 'test-category'
            assert post.author.username == 'testadmin'
            assert [t.slug for t in post.tags] == ['python']

    def test_content_blocks_round_trip(self, app, make_post):
        blocks = [
            {'id': 'b1', 'type': 'title', 'content': 'Hello', 'order': 0, 'metadata': {'level': 2}},
            {'id': 'b2', 'type': 'paragraph', 'content': 'World', 'order': 1},
        ]
        with app.app_context():
            post = make_post(content_blocks=blocks)
            db.session.expire_all()
            assert db.session.get(Post, post.id).content_blocks == blocks

    def test_status_values(self):
        assert PostStatus.values() == ['draft', 'published', 'archived']


class TestPostTag:
    """Test cases for the association table."""

    def test_composite_key_unique(self, app, make_post, test_tag):
        with app.app_context():
            post = make_post(tags=[test_tag])
            db.session.add(PostTag(post_id=post.id, tag_id=test_tag.id))
            with pytest.raises(IntegrityError):
                db.session.commit()
            db.session.rollback()

    def test_tag_posts_relationship(self, app, make_post, test_tag):
        with app.app_context():
            make_post(title='One', tags=[test_tag])
            make_post(title='Two', tags=[test_tag])
            tag = db.session.get(Tag, test_tag.id)
            assert sorted(p.slug for p in tag.posts) == ['one', 'two']


class TestNewsletterSubscriber:
    """Test cases for NewsletterSubscriber model."""

    def test_defaults(self, app):
        with app.app_context():
            sub = NewsletterSubscriber(email='reader@mail.com')
            db.session.add(sub)
            db.session.commit()
            assert sub.is_active is True
            assert sub.subscribed_at is not None
            assert sub.unsubscribed_at is None

    def test_email_unique(self, app):
        with app.app_context():
            db.session.add(NewsletterSubscriber(email='reader@mail.com'))
            db.session.commit()
            db.session.add(NewsletterSubscriber(email='reader@mail.com'))
            with pytest.raises(IntegrityError):
                db.session.commit()
            db.session.rollback()
