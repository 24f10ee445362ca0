"""Tests for :mod:`interface_core.routes` using the shared fixtures."""

from .. import status


def test_index(client):
    response = client.get('/')
    assert response.status_code == status.HTTP_200_OK
    assert response.get_json() == {'message': 'Interface API is running'}


def test_cors_allowed_origin(client):
    """Credentialed requests from the configured origin are allowed."""
    response = client.get('/api/status',
                          headers={'Origin': 'http://localhost:3000'})
    assert response.headers['Access-Control-Allow-Origin'] == \
        'http://localhost:3000'
    assert response.headers['Access-Control-Allow-Credentials'] == 'true'


def test_cors_other_origin(client):
    response = client.get('/api/status',
                          headers={'Origin': 'https://evil.example.com'})
    assert 'Access-Control-Allow-Origin' not in response.headers


def test_method_not_allowed(client):
    response = client.get('/api/login')
    assert response.status_code == 405
    assert 'error' in response.get_json()


def test_login_not_json(client):
    response = client.post('/api/login', data='username=foo')
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.get_json() == {
        'error': 'Valid username and password are required'
    }


def test_no_hsts_outside_production(app, client):
    assert not app.config['PRODUCTION']
    response = client.get('/')
    assert 'Strict-Transport-Security' not in response.headers
    assert response.headers['Referrer-Policy'] == 'no-referrer'
