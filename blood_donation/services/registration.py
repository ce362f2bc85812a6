from datetime import datetime
from flask import current_app
from sqlalchemy.exc import IntegrityError
from blood_donation.errors import ConflictError, ValidationError
from blood_donation.extensions import db
from blood_donation.models.otp import OTP, OtpStatus


def _consume(otp, now):
    if not OTP.transition(otp.id, OtpStatus.VERIFIED, OtpStatus.CONSUMED, consumed_at=now):
        raise ConflictError(f"OTP already used, please verify {otp.address} again")


def register_account(account_model, payload, issuer):
    """Create an account from a validated registration payload.

    The declared email must carry a verified OTP, which is consumed in the
    same transaction as the insert. Nothing is committed unless the account
    row, the OTP consumption and the token pair all succeed.

    Returns ``(account, access_token, refresh_token)``.
    """
    email = payload.contact_email
    verified_email = OTP.find_verified(email)
    if not verified_email:
        raise ValidationError('Please verify your email first')

    if account_model.find_by_email(email):
        raise ValidationError('User already exists')

    if account_model.find_by_phone(payload.contact_phone):
        raise ValidationError('Phone number already registered')

    account = account_model(**payload.to_account_fields())
    account.set_password(payload.password)
    account.email_verified = True

    now = datetime.utcnow()
    verified_phone = None
    if account.tracks_phone_verification:
        verified_phone = OTP.find_verified(payload.contact_phone)
        account.phone_verified = verified_phone is not None

    try:
        db.session.add(account)
        _consume(verified_email, now)
        if verified_phone:
            _consume(verified_phone, now)
        db.session.flush()
        access_token, refresh_token = issuer.issue_pair(account)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError('User already exists')
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(f"Registered {account.kind.value} account {account.id} for {email}")
    return account, access_token, refresh_token
