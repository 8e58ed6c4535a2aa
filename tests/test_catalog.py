"""
Tests for reference data endpoints.
"""

from vibehub import db
from vibehub.models import Tag


class TestCatalog:

    def test_categories_sorted_by_name(self, client, category, other_category):
        response = client.get('/api/categories')

        assert response.status_code == 200
        assert [c['name'] for c in response.json] == ['Education', 'Productivity']

    def test_tools_include_links(self, client, tools):
        response = client.get('/api/tools')

        names = [t['name'] for t in response.json]
        assert names == sorted(names)
        assert all('website_url' in t and 'logo_url' in t for t in response.json)

    def test_tags(self, client, db_session):
        db.session.add_all([Tag(name='games'), Tag(name='ai')])
        db.session.commit()

        response = client.get('/api/tags')

        assert [t['name'] for t in response.json] == ['ai', 'games']


class TestSeedReferenceData:

    def test_seed_is_idempotent(self, client, db_session):
        from init_db import seed_reference_data
        from vibehub.constants import DEFAULT_CATEGORIES, DEFAULT_TOOLS

        added = seed_reference_data()
        assert added == len(DEFAULT_CATEGORIES) + len(DEFAULT_TOOLS)
        assert seed_reference_data() == 0

        names = [t['name'] for t in client.get('/api/tools').json]
        assert 'Cursor' in names and 'Lovable' in names
