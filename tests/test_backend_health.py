"""
Smoke tests: the app boots and answers, and store failures surface as JSON.
"""

from sqlalchemy.exc import OperationalError

from vibehub.services import listing_query
from vibehub.services.listing_query import DataAccessError


class TestHealthEndpoints:

    def test_root_health(self, client):
        resp = client.get('/health')
        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'ok'

    def test_unknown_route(self, client):
        assert client.get('/api/nope').status_code == 404


class TestDataAccessFailure:

    def test_list_failure_returns_500(self, client, db_session, monkeypatch):
        def broken(*args, **kwargs):
            raise DataAccessError('Failed to fetch listings')

        monkeypatch.setattr('vibehub.routes.apps.list_listings', broken)
        resp = client.get('/api/apps')

        assert resp.status_code == 500
        assert resp.get_json() == {'error': 'Database unavailable'}
        assert listing_query.list_listings is not broken

    def test_detail_failure_returns_500(self, client, make_listing, monkeypatch):
        listing = make_listing()

        def broken_get(*args, **kwargs):
            raise OperationalError('SELECT', {}, Exception('connection refused'))

        monkeypatch.setattr(listing_query.db.session, 'get', broken_get)
        resp = client.get(f'/api/apps/{listing.id}')

        assert resp.status_code == 500
        assert resp.get_json() == {'error': 'Database unavailable'}
