"""End-to-end scenarios through the HTTP API."""

from blogapi.extensions import db
from blogapi.models import Category, NewsletterSubscriber, Tag


class TestSlugScenarios:
    """Slug derivation seen from the outside."""

    def test_normalized_name_collision(self, client, auth_headers):
        first = client.post('/api/categories', headers=auth_headers, json={'name': 'Imposto de Renda'})
        second = client.post('/api/categories', headers=auth_headers, json={'name': 'Imposto De Renda!!'})
        assert first.get_json()['data']['slug'] == 'imposto-de-renda'
        assert second.status_code == 201
        assert second.get_json()['data']['slug'] == 'imposto-de-renda-1'

    def test_rename_back_reuses_own_slug(self, client, auth_headers):
        created = client.post('/api/tags', headers=auth_headers, json={'name': 'Django'}).get_json()['data']
        url = f"/api/tags/{created['id']}"
        assert client.put(url, headers=auth_headers, json={'name': 'Django ORM'}).get_json()['data']['slug'] == 'django-orm'
        assert client.put(url, headers=auth_headers, json={'name': 'Django'}).get_json()['data']['slug'] == 'django'

    def test_symbol_only_name_rejected(self, client, auth_headers):
        response = client.post('/api/categories', headers=auth_headers, json={'name': '???'})
        assert response.status_code == 400


class TestPostLifecycle:
    """A post moving through categories, tags and statuses."""

    def test_full_lifecycle_keeps_counters_exact(self, client, auth_headers):
        news = client.post('/api/categories', headers=auth_headers, json={'name': 'News'}).get_json()['data']
        tips = client.post('/api/categories', headers=auth_headers, json={'name': 'Tips'}).get_json()['data']
        tag_a = client.post('/api/tags', headers=auth_headers, json={'name': 'A'}).get_json()['data']
        tag_b = client.post('/api/tags', headers=auth_headers, json={'name': 'B'}).get_json()['data']

        created = client.post('/api/posts', headers=auth_headers, json={
            'title': 'Quarterly Taxes',
            'categoryId': news['id'],
            'tagIds': [tag_a['id']],
            'contentBlocks': [
                {'type': 'paragraph', 'content': 'Body', 'order': 2},
                {'type': 'title', 'content': 'Intro', 'order': 1, 'metadata': {'level': 2}},
                {'type': 'image', 'content': 'https://cdn.blog.com/x.png', 'order': 3},
            ],
        })
        assert created.status_code == 201
        post = created.get_json()['data']
        assert [b['type'] for b in post['contentBlocks']] == ['title', 'paragraph', 'image']
        assert post['contentBlocks'][2]['metadata']['imageAlt'] == 'Post image'
        assert post['status'] == 'draft'
        assert client.get(f"/api/categories/{news['id']}").get_json()['data']['postsCount'] == 1
        assert client.get(f"/api/tags/{tag_a['id']}").get_json()['data']['postsCount'] == 1

        moved = client.put(f"/api/posts/{post['id']}", headers=auth_headers, json={
            'categoryId': tips['id'],
            'tagIds': [tag_b['id']],
            'status': 'published',
        }).get_json()['data']
        assert moved['publishedAt'] is not None
        assert client.get(f"/api/categories/{news['id']}").get_json()['data']['postsCount'] == 0
        assert client.get(f"/api/categories/{tips['id']}").get_json()['data']['postsCount'] == 1
        assert client.get(f"/api/tags/{tag_a['id']}").get_json()['data']['postsCount'] == 0
        assert client.get(f"/api/tags/{tag_b['id']}").get_json()['data']['postsCount'] == 1

        draft = client.put(f"/api/posts/{post['id']}/status", headers=auth_headers,
                           json={'status': 'draft'}).get_json()['data']
        assert draft['publishedAt'] is None

        assert client.delete(f"/api/categories/{tips['id']}", headers=auth_headers).status_code == 400
        assert client.delete(f"/api/posts/{post['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/api/categories/{tips['id']}").get_json()['data']['postsCount'] == 0
        assert client.get(f"/api/tags/{tag_b['id']}").get_json()['data']['postsCount'] == 0
        assert client.delete(f"/api/categories/{tips['id']}", headers=auth_headers).status_code == 200

    def test_failed_update_leaves_post_untouched(self, client, auth_headers, test_post, test_tag):
        before = client.get(f'/api/posts/{test_post.id}').get_json()['data']
        response = client.put(f'/api/posts/{test_post.id}', headers=auth_headers, json={
            'title': 'Brand New Title',
            'tagIds': [test_tag.id],
            'contentBlocks': [{'type': 'quote', 'content': '', 'order': 0}],
        })
        assert response.status_code == 400
        after = client.get(f'/api/posts/{test_post.id}').get_json()['data']
        assert after['title'] == before['title']
        assert after['slug'] == before['slug']
        assert after['tags'] == []
        assert db.session.get(Tag, test_tag.id).posts_count == 0


class TestNewsletterScenario:
    """Case-folded subscribe / unsubscribe / resubscribe."""

    def test_resubscribe_reuses_row(self, client):
        assert client.post('/api/newsletter/subscribe', json={'email': 'A@B.com'}).status_code == 201
        assert client.post('/api/newsletter/unsubscribe', json={'email': 'a@b.com'}).status_code == 200
        assert client.post('/api/newsletter/subscribe', json={'email': 'a@B.COM'}).status_code == 200

        rows = db.session.execute(db.select(NewsletterSubscriber)).scalars().all()
        assert [(r.email, r.is_active, r.unsubscribed_at) for r in rows] == [('a@b.com', True, None)]


class TestLoginThenWrite:
    """Obtain a token through login and use it."""

    def test_login_token_authorizes_writes(self, client, test_admin_user):
        token = client.post('/api/auth/login', json={
            'username': 'testadmin', 'password': 'adminpassword'
        }).get_json()['data']['token']

        response = client.post('/api/categories', headers={'Authorization': f'Bearer {token}'},
                               json={'name': 'From Login'})
        assert response.status_code == 201
        assert db.session.execute(db.select(Category).filter_by(slug='from-login')).scalar_one()
