from datetime import datetime, timedelta
from flask import current_app
from sqlalchemy.exc import IntegrityError
import secrets
from blood_donation.constants import OTP_LENGTH, OTP_TYPE_VERIFICATION
from blood_donation.errors import AuthError, ConflictError, InternalError
from blood_donation.extensions import db
from blood_donation.models.otp import OTP, OtpChannel, OtpStatus
from blood_donation.utils.email import send_otp_email
from blood_donation.utils.sms import send_otp_sms


def generate_code():
    return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


def _dispatch(otp, code):
    """Hand the code to the mail or SMS sender; returns whether it was accepted"""
    expiry_minutes = current_app.config['OTP_EXPIRY_MINUTES']
    if otp.channel == OtpChannel.PHONE:
        return send_otp_sms(f"{current_app.config['DEFAULT_COUNTRY_CODE']}{otp.address}", code, expiry_minutes)
    return send_otp_email(otp.address, code, expiry_minutes)


def issue_code(address, channel, account_model):
    """Create a pending code for ``address`` and send it out-of-band.

    Raises ``ConflictError`` when a verified ``account_model`` already owns the
    address, or when an unexpired code is still outstanding for it, and
    ``InternalError`` when the sender refuses the code.
    """
    if account_model.find_verified_by_contact(address):
        label = 'Phone number' if channel == OtpChannel.PHONE else 'Email'
        raise ConflictError(f"{label} already registered")

    now = datetime.utcnow()
    otp = OTP(
        address=address,
        channel=channel,
        type=OTP_TYPE_VERIFICATION,
        status=OtpStatus.PENDING,
        pending_key=OTP.make_pending_key(address),
        expires_at=now + timedelta(minutes=current_app.config['OTP_EXPIRY_MINUTES']),
        created_at=now
    )
    code = generate_code()
    otp.set_otp(code)

    try:
        OTP.expire_stale(address, now=now)
        db.session.add(otp)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(f"OTP already sent to {address}, please check your {channel.value}")
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(f"OTP {otp.id} issued to {address} via {channel.value}")
    if not _dispatch(otp, code):
        # Undelivered codes must not block the next request
        try:
            OTP.transition(otp.id, OtpStatus.PENDING, OtpStatus.EXPIRED)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        current_app.logger.error(f"OTP {otp.id} could not be delivered to {address}")
        raise InternalError('Failed to send OTP, please try again')
    return otp


def verify_code(address, code):
    """Move the pending code for ``address`` to verified if ``code`` matches"""
    otp = OTP.find_pending(address)
    if not otp or not otp.check_otp(code):
        raise AuthError('Invalid OTP')
    if otp.is_expired():
        raise AuthError('OTP has expired, please request a new one')

    try:
        moved = OTP.transition(otp.id, OtpStatus.PENDING, OtpStatus.VERIFIED, verified_at=datetime.utcnow())
        if not moved:
            raise AuthError('Invalid OTP')
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(f"OTP {otp.id} verified for {address}")
    return otp.id
