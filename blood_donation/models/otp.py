from blood_donation.extensions import db
from blood_donation.constants import OTP_TYPE_VERIFICATION
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
import enum


class OtpStatus(enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    CONSUMED = "consumed"
    EXPIRED = "expired"


class OtpChannel(enum.Enum):
    EMAIL = "email"
    PHONE = "phone"


class OTP(db.Model):
    """One-time verification code keyed by contact address.

    ``pending_key`` is only set while the record is pending. Its unique
    constraint keeps a single outstanding code per (type, address) even when
    two requests race; NULLs never collide.
    """
    __tablename__ = 'otps'

    id = db.Column(db.Integer, primary_key=True)
    address = db.Column(db.String(120), nullable=False, index=True)  # Email or Phone
    channel = db.Column(db.Enum(OtpChannel), nullable=False, default=OtpChannel.EMAIL)
    type = db.Column(db.String(20), nullable=False, default=OTP_TYPE_VERIFICATION)
    hashed_otp = db.Column(db.String(255), nullable=False)
    status = db.Column(db.Enum(OtpStatus), nullable=False, default=OtpStatus.PENDING, index=True)
    pending_key = db.Column(db.String(160), unique=True, nullable=True)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    verified_at = db.Column(db.DateTime, nullable=True)
    consumed_at = db.Column(db.DateTime, nullable=True)

    @staticmethod
    def make_pending_key(address, otp_type=OTP_TYPE_VERIFICATION):
        return f"{otp_type}:{address}"

    def set_otp(self, otp_code):
        self.hashed_otp = generate_password_hash(otp_code)

    def check_otp(self, otp_code):
        return check_password_hash(self.hashed_otp, otp_code)

    def is_expired(self, now=None):
        return (now or datetime.utcnow()) >= self.expires_at

    @classmethod
    def find_pending(cls, address, otp_type=OTP_TYPE_VERIFICATION):
        return cls.query.filter_by(pending_key=cls.make_pending_key(address, otp_type)).first()

    @classmethod
    def find_verified(cls, address, otp_type=OTP_TYPE_VERIFICATION):
        return cls.query.filter_by(
            address=address, type=otp_type, status=OtpStatus.VERIFIED
        ).order_by(cls.verified_at.desc()).first()

    @classmethod
    def expire_stale(cls, address, otp_type=OTP_TYPE_VERIFICATION, now=None):
        """Retire the pending record for ``address`` if it is past its expiry"""
        return cls.query.filter(
            cls.pending_key == cls.make_pending_key(address, otp_type),
            cls.expires_at <= (now or datetime.utcnow())
        ).update({'status': OtpStatus.EXPIRED, 'pending_key': None}, synchronize_session=False)

    @classmethod
    def transition(cls, otp_id, from_status, to_status, **values):
        """Conditional status change; returns the number of rows moved (0 or 1)"""
        values.update({'status': to_status, 'pending_key': None})
        return cls.query.filter(
            cls.id == otp_id, cls.status == from_status
        ).update(values, synchronize_session=False)

    def __repr__(self):
        return f'<OTP {self.address} ({self.status.value})>'
