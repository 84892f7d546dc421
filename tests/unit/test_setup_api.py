"""
Station Reports - Setup API Unit Tests

Walks the /api/setup endpoints end to end against an in-memory database.
"""

import pytest
from unittest.mock import patch

from station_reports.api.routes.setup import SESSION_USER_KEY


@pytest.fixture
def setup_db(session_scope):
    with patch('station_reports.api.routes.setup.get_db_session', new=session_scope):
        yield


def _register(client):
    return client.post('/api/setup/register', json={"username": "admin@example.com", "password": "secret"})


class TestSetupFlow:

    def test_full_walkthrough(self, client, setup_db):
        assert client.get('/api/setup').get_json()["step"] == "register"

        response = _register(client)
        assert response.status_code == 201
        assert response.get_json()["next_step"] == "station"
        with client.session_transaction() as http_session:
            assert http_session[SESSION_USER_KEY] == response.get_json()["user_id"]

        response = client.post('/api/setup/station', json={"name": "Radio One"})
        assert response.status_code == 201
        assert response.get_json()["station"]["short_name"] == "radio_one"

        response = client.get('/api/setup/settings')
        assert response.status_code == 200
        assert response.get_json()["settings"]["history_keep_days"] == 7

        response = client.post('/api/setup/settings', json={"instance_name": "My Radio", "analytics": "none"})
        data = response.get_json()
        assert response.status_code == 200
        assert data["settings"]["instance_name"] == "My Radio"
        assert data["settings"]["analytics"] == "none"
        assert data["message"].startswith("Setup is now complete!")

        response = client.get('/api/setup/complete')
        assert response.status_code == 200
        assert response.get_json()["message"] == "Setup has already been completed!"

    def test_form_posts_are_accepted(self, client, setup_db):
        response = client.post('/api/setup/register', data={"username": "admin@example.com", "password": "secret"})

        assert response.status_code == 201


class TestSetupErrors:

    def test_invalid_registration_is_400(self, client, setup_db):
        response = client.post('/api/setup/register', json={"username": "admin@example.com"})
        data = response.get_json()

        assert response.status_code == 400
        assert list(data["fields"]) == ["password"]

    def test_station_before_registration_is_409(self, client, setup_db):
        response = client.post('/api/setup/station', json={"name": "Radio One"})

        assert response.status_code == 409
        assert response.get_json()["step"] == "register"

    def test_anonymous_visitor_after_registration_is_401(self, app, client, setup_db):
        _register(client)
        anonymous = app.test_client()

        response = anonymous.get('/api/setup')

        assert response.status_code == 401

    def test_settings_form_before_station_is_409(self, client, setup_db):
        _register(client)

        response = client.get('/api/setup/settings')

        assert response.status_code == 409
        assert response.get_json()["step"] == "station"

    def test_invalid_settings_are_400(self, client, setup_db):
        _register(client)
        client.post('/api/setup/station', json={"name": "Radio One"})

        response = client.post('/api/setup/settings', json={"history_keep_days": "many"})

        assert response.status_code == 400
        assert "history_keep_days" in response.get_json()["fields"]

    def test_complete_before_finishing_is_409(self, client, setup_db):
        response = client.get('/api/setup/complete')

        assert response.status_code == 409
        assert response.get_json() == {"success": False, "step": "register"}
