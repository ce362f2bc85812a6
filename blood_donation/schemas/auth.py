from typing import ClassVar, Optional, Tuple
from pydantic import field_validator
from pydantic_core import PydanticCustomError
from blood_donation.schemas.base import Payload, is_blank, normalize_email, normalize_phone


class EmailOtpRequest(Payload):
    """Body of ``/send-email-otp``"""

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('email',)
    MISSING_MESSAGE: ClassVar[str] = 'Please provide a email'

    email: str

    @field_validator('email')
    @classmethod
    def check_email(cls, value):
        try:
            return normalize_email(value)
        except PydanticCustomError:
            raise PydanticCustomError('invalid_email', 'Please provide a valid email')


class PhoneOtpRequest(Payload):
    """Body of ``/send-phone-otp``"""

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('phone',)
    MISSING_MESSAGE: ClassVar[str] = 'Please provide a phone number'

    phone: str

    @field_validator('phone', mode='before')
    @classmethod
    def check_phone(cls, value):
        try:
            return normalize_phone(value)
        except PydanticCustomError:
            raise PydanticCustomError('invalid_phone', 'Please provide a valid phone number')


class OtpVerification(Payload):
    """Body of ``/verify-otp``: the code plus the email or phone it was sent to"""

    email: Optional[str] = None
    phone: Optional[str] = None
    otp: str

    @classmethod
    def precheck(cls, data):
        super().precheck(data)
        if is_blank(data.get('otp')) or (is_blank(data.get('email')) and is_blank(data.get('phone'))):
            raise PydanticCustomError('missing_fields', cls.MISSING_MESSAGE)

    @field_validator('otp', mode='before')
    @classmethod
    def coerce_otp(cls, value):
        return str(value).strip()

    @field_validator('email')
    @classmethod
    def check_email(cls, value):
        return normalize_email(value) if value else None

    @field_validator('phone', mode='before')
    @classmethod
    def check_phone(cls, value):
        return normalize_phone(value) if not is_blank(value) else None

    @property
    def address(self):
        return self.email or self.phone


class LoginRequest(Payload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('email', 'password')

    email: str
    password: str

    @field_validator('email')
    @classmethod
    def lower_email(cls, value):
        return value.strip().lower()


class ChangePasswordRequest(Payload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('oldPassword', 'newPassword', 'confirmPassword')

    old_password: str
    new_password: str
    confirm_password: str

    @classmethod
    def precheck(cls, data):
        super().precheck(data)
        if data['newPassword'] != data['confirmPassword']:
            raise PydanticCustomError('password_mismatch', 'Passwords do not match')
