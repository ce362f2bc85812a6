"""
Tests for model hooks, the OTP store and token issuance.
"""

from dataclasses import FrozenInstanceError
from datetime import date, datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from blood_donation.errors import UnauthorizedError
from blood_donation.extensions import db
from blood_donation.models import OTP, OtpStatus, OtpChannel, Donor
from blood_donation.models.account import compute_age
from blood_donation.services.session import ACCESS, REFRESH, SessionSettings, TokenIssuer
from conftest import unique_email, unique_phone


def _donor(**overrides):
    fields = dict(
        full_name='Test Donor', dob=date(1990, 6, 15), weight=70, blood_group='B+',
        email=unique_email(), phone=unique_phone(), state='Kerala'
    )
    fields.update(overrides)
    donor = Donor(**fields)
    donor.set_password('secret')
    return donor


def _otp(address, minutes=10):
    otp = OTP(
        address=address,
        channel=OtpChannel.EMAIL,
        pending_key=OTP.make_pending_key(address),
        expires_at=datetime.utcnow() + timedelta(minutes=minutes)
    )
    otp.set_otp('654321')
    return otp


class TestComputeAge:

    def test_birthday_today(self):
        assert compute_age(date(2000, 3, 1), today=date(2020, 3, 1)) == 20

    def test_day_before_birthday(self):
        assert compute_age(date(2000, 3, 1), today=date(2020, 2, 29)) == 19


class TestDonorHooks:

    def test_password_hashed_and_age_set_on_insert(self, app):
        with app.app_context():
            donor = _donor()
            db.session.add(donor)
            db.session.commit()

            stored = Donor.find_by_id(donor.id, with_password=True)
            assert stored.password != 'secret'
            assert stored.check_password('secret')
            assert stored.age == compute_age(date(1990, 6, 15))

    def test_unrelated_update_keeps_hash(self, app):
        with app.app_context():
            donor = _donor()
            db.session.add(donor)
            db.session.commit()
            original = Donor.find_by_id(donor.id, with_password=True).password

            donor.state = 'Goa'
            db.session.commit()

            assert Donor.find_by_id(donor.id, with_password=True).password == original

    def test_password_change_is_rehashed(self, app):
        with app.app_context():
            donor = _donor()
            db.session.add(donor)
            db.session.commit()

            donor.set_password('another')
            db.session.commit()

            stored = Donor.find_by_id(donor.id, with_password=True)
            assert stored.password != 'another'
            assert stored.check_password('another')
            assert not stored.check_password('secret')

    def test_find_verified_by_contact(self, app):
        with app.app_context():
            donor = _donor(email_verified=True)
            db.session.add(donor)
            db.session.commit()

            assert Donor.find_verified_by_contact(donor.email) is not None
            assert Donor.find_verified_by_contact(donor.phone) is None


class TestOtpStore:

    def test_one_pending_code_per_address(self, app):
        with app.app_context():
            address = unique_email()
            db.session.add(_otp(address))
            db.session.commit()

            db.session.add(_otp(address))
            with pytest.raises(IntegrityError):
                db.session.commit()
            db.session.rollback()

    def test_transition_moves_only_from_expected_status(self, app):
        with app.app_context():
            otp = _otp(unique_email())
            db.session.add(otp)
            db.session.commit()

            assert OTP.transition(otp.id, OtpStatus.PENDING, OtpStatus.VERIFIED) == 1
            assert OTP.transition(otp.id, OtpStatus.PENDING, OtpStatus.VERIFIED) == 0
            db.session.commit()

            db.session.refresh(otp)
            assert otp.status == OtpStatus.VERIFIED
            assert otp.pending_key is None

    def test_expire_stale_ignores_live_codes(self, app):
        with app.app_context():
            live = _otp(unique_email())
            stale = _otp(unique_email(), minutes=-1)
            db.session.add_all([live, stale])
            db.session.commit()

            assert OTP.expire_stale(live.address) == 0
            assert OTP.expire_stale(stale.address) == 1
            db.session.commit()

            assert OTP.find_pending(live.address) is not None
            assert OTP.find_pending(stale.address) is None


class TestTokenIssuer:

    @pytest.fixture
    def issuer(self, app):
        return TokenIssuer(SessionSettings.from_config(app.config))

    @pytest.fixture
    def donor(self, app):
        with app.app_context():
            donor = _donor()
            db.session.add(donor)
            db.session.commit()
            yield donor

    def test_access_token_claims(self, issuer, donor):
        claims = issuer.decode(issuer.issue_access_token(donor), ACCESS)

        assert claims['sub'] == str(donor.id)
        assert claims['kind'] == 'donor'
        assert claims['email'] == donor.email
        assert claims['fullName'] == donor.full_name

    def test_refresh_token_carries_identity_only(self, issuer, donor):
        claims = issuer.decode(issuer.issue_refresh_token(donor), REFRESH)

        assert claims['sub'] == str(donor.id)
        assert 'email' not in claims

    def test_tokens_are_signed_with_separate_secrets(self, issuer, donor):
        access_token, refresh_token = issuer.issue_pair(donor)

        with pytest.raises(UnauthorizedError):
            issuer.decode(access_token, REFRESH)
        with pytest.raises(UnauthorizedError):
            issuer.decode(refresh_token, ACCESS)

    def test_expired_token(self, app, donor):
        settings = SessionSettings.from_config(app.config)
        expired = TokenIssuer(SessionSettings(
            access_secret=settings.access_secret,
            refresh_secret=settings.refresh_secret,
            access_ttl=timedelta(seconds=-5),
            refresh_ttl=settings.refresh_ttl,
        ))

        with pytest.raises(UnauthorizedError) as exc_info:
            expired.decode(expired.issue_access_token(donor), ACCESS)
        assert exc_info.value.message == 'Token has expired'

    def test_settings_are_immutable(self, issuer):
        with pytest.raises(FrozenInstanceError):
            issuer.settings.access_secret = 'changed'
