"""
Tests for the error envelope and service-level routes.
"""

from blood_donation.errors import ConflictError, InternalError
from conftest import DONOR_URL


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_unknown_route(client):
    response = client.get('/api/v1/unknown')

    assert response.status_code == 404
    assert response.get_json() == {
        'statusCode': 404,
        'message': 'Resource not found',
        'success': False,
        'errors': [],
    }


def test_wrong_method(client):
    response = client.get(f'{DONOR_URL}/login')

    assert response.status_code == 405
    assert response.get_json()['message'] == 'Method not allowed'


def test_logout_rejects_post(client):
    assert client.post(f'{DONOR_URL}/logout').status_code == 405


def test_api_error_to_dict():
    error = ConflictError('Email already registered')

    assert error.to_dict() == {
        'statusCode': 409,
        'message': 'Email already registered',
        'success': False,
        'errors': [],
    }


def test_api_error_defaults():
    error = InternalError()

    assert error.status_code == 500
    assert error.message == 'An unexpected error occurred'


def test_unexpected_failure_hides_details(app, client, monkeypatch):
    from blood_donation.routes import common

    def explode(*args, **kwargs):
        raise RuntimeError('database password is hunter2')

    monkeypatch.setattr(common, 'verify_code', explode)

    response = client.post(f'{DONOR_URL}/verify-otp', json={'email': 'a@b.com', 'otp': '123456'})

    assert response.status_code == 500
    body = response.get_json()
    assert body['success'] is False
    assert 'hunter2' not in body['message']


def test_rate_limit_uses_error_envelope(client):
    for _ in range(10):
        assert client.post(f'{DONOR_URL}/login', json={}).status_code == 400

    response = client.post(f'{DONOR_URL}/login', json={})

    assert response.status_code == 429
    assert response.get_json() == {
        'statusCode': 429,
        'message': 'Too many requests, please try again later',
        'success': False,
        'errors': [],
    }
