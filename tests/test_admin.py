"""
Tests for the admin moderation listing.
"""


class TestAdminApps:
    """Tests for GET /api/admin/apps"""

    def test_requires_authentication(self, client, db_session):
        response = client.get('/api/admin/apps')

        assert response.status_code == 401

    def test_requires_admin(self, client, auth_headers):
        response = client.get('/api/admin/apps', headers=auth_headers)

        assert response.status_code == 403
        assert response.json['error'] == 'Admin access required'

    def test_defaults_to_pending_queue(self, client, make_listing, test_user, second_user, admin_headers):
        first = make_listing(status='pending_approval', creator_id=test_user.id, days_old=2)
        second = make_listing(status='pending_approval', creator_id=second_user.id, days_old=1)
        make_listing(status='published', creator_id=test_user.id)
        make_listing(status='draft', creator_id=test_user.id)

        response = client.get('/api/admin/apps', headers=admin_headers)

        assert response.status_code == 200
        assert response.json['status'] == 'pending_approval'
        assert [app['id'] for app in response.json['apps']] == [second.id, first.id]

    def test_rejected_queue_includes_reason(self, client, make_listing, test_user, admin_headers):
        make_listing(status='rejected', creator_id=test_user.id, rejection_reason='Launch URL is down')

        response = client.get('/api/admin/apps?status=rejected', headers=admin_headers)

        assert response.json['total'] == 1
        assert response.json['apps'][0]['rejection_reason'] == 'Launch URL is down'

    def test_unknown_status(self, client, admin_headers):
        response = client.get('/api/admin/apps?status=archived', headers=admin_headers)

        assert response.status_code == 400
