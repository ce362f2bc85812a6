"""
Pytest configuration and fixtures for testing the Blood Donation API.
"""

import os
import sys
from datetime import date, timedelta
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from blood_donation import create_app
from blood_donation.extensions import db, limiter
from blood_donation.services import verification

fake = Faker()

OTP_CODE = '123456'
DONOR_URL = '/api/v1/doners'
CAMP_URL = '/api/v1/camps'


def cookie_value(response, name):
    """Value of cookie ``name`` in the response's Set-Cookie headers, or None."""
    for header in response.headers.getlist('Set-Cookie'):
        key, _, rest = header.partition('=')
        if key == name:
            return rest.split(';', 1)[0]
    return None


def unique_email():
    return fake.unique.email().lower()


def unique_phone():
    return fake.unique.numerify('9#########')


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Start each test with fresh rate-limit counters and leave no rows behind."""
    with app.app_context():
        limiter.reset()
    yield
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    """Pin generated codes and capture dispatched messages instead of sending them."""
    sent = []

    def record_email(email, code, minutes):
        sent.append(('email', email, code))
        return True

    def record_sms(phone, code, minutes):
        sent.append(('sms', phone, code))
        return True

    monkeypatch.setattr(verification, 'generate_code', lambda: OTP_CODE)
    monkeypatch.setattr(verification, 'send_otp_email', record_email)
    monkeypatch.setattr(verification, 'send_otp_sms', record_sms)
    return sent


@pytest.fixture
def donor_payload():
    """Factory for a complete donor registration body."""
    def make(email=None, **overrides):
        data = {
            'fullName': fake.name(),
            'dob': '1995-04-12',
            'weight': 62,
            'bloodGroup': 'O+',
            'email': email or unique_email(),
            'phone': unique_phone(),
            'state': 'Karnataka',
            'password': 'p1',
            'confirmPassword': 'p1',
        }
        data.update(overrides)
        return data
    return make


@pytest.fixture
def camp_payload():
    """Factory for a complete donation camp registration body."""
    def make(email=None, **overrides):
        data = {
            'organizationName': fake.company(),
            'organizationType': 'NGO',
            'organizerName': fake.name(),
            'organizerMobileNumber': unique_phone(),
            'organizerEmail': email or unique_email(),
            'campName': 'Community Blood Drive',
            'address': {
                'addressLine1': '12 MG Road',
                'state': 'Karnataka',
                'city': 'Bengaluru',
                'pincode': '560001',
            },
            'bloodbank': 'City Blood Bank',
            'campDate': (date.today() + timedelta(days=7)).isoformat(),
            'campStartTime': '09:00',
            'campEndTime': '17:00',
            'estimatedParticipants': 120,
            'password': 'p1',
            'confirmPassword': 'p1',
        }
        data.update(overrides)
        return data
    return make


@pytest.fixture
def verify_email(client):
    """Run send-email-otp and verify-otp for an address."""
    def run(email, base_url=DONOR_URL):
        sent = client.post(f'{base_url}/send-email-otp', json={'email': email})
        assert sent.status_code == 200, sent.get_json()
        verified = client.post(f'{base_url}/verify-otp', json={'email': email, 'otp': OTP_CODE})
        assert verified.status_code == 200, verified.get_json()
    return run


@pytest.fixture
def registered_donor(client, donor_payload, verify_email):
    """A donor registered through the API; the client holds its session cookies."""
    payload = donor_payload()
    verify_email(payload['email'])
    response = client.post(f'{DONOR_URL}/register-doner', json=payload)
    assert response.status_code == 201, response.get_json()
    return {
        'id': response.get_json()['data']['id'],
        'email': payload['email'],
        'phone': payload['phone'],
        'password': payload['password'],
        'response': response,
    }


@pytest.fixture
def registered_camp(client, camp_payload, verify_email):
    """A donation camp registered through the API."""
    payload = camp_payload()
    verify_email(payload['organizerEmail'], CAMP_URL)
    response = client.post(f'{CAMP_URL}/register-camp', json=payload)
    assert response.status_code == 201, response.get_json()
    return {
        'id': response.get_json()['data']['id'],
        'email': payload['organizerEmail'],
        'password': payload['password'],
        'response': response,
    }
