from datetime import date, time
from typing import ClassVar, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from blood_donation.constants import BloodGroup, MIN_DONOR_WEIGHT
from blood_donation.schemas.base import Payload, is_blank, normalize_email, normalize_phone

ADDRESS_REQUIRED_FIELDS = ('addressLine1', 'state', 'city', 'pincode')


class RegistrationPayload(Payload):
    """Shared ordering: required fields, then password confirmation, then address"""

    MISSING_MESSAGE: ClassVar[str] = 'All fields are required'
    HAS_ADDRESS: ClassVar[bool] = False

    password: str
    confirm_password: str

    @classmethod
    def precheck(cls, data):
        super().precheck(data)
        if data['password'] != data['confirmPassword']:
            raise PydanticCustomError('password_mismatch', 'Passwords do not match')
        if cls.HAS_ADDRESS:
            address = data.get('address')
            if not isinstance(address, dict) or any(is_blank(address.get(f)) for f in ADDRESS_REQUIRED_FIELDS):
                raise PydanticCustomError('missing_address', 'All address fields are required')

    @property
    def contact_email(self):
        raise NotImplementedError

    @property
    def contact_phone(self):
        raise NotImplementedError

    def to_account_fields(self):
        """Model keyword arguments, without the secret"""
        raise NotImplementedError


class DonorRegistration(RegistrationPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = (
        'fullName', 'dob', 'weight', 'bloodGroup', 'email', 'phone', 'state',
        'password', 'confirmPassword'
    )

    full_name: str = Field(max_length=100)
    dob: date
    weight: float
    blood_group: BloodGroup
    email: str = Field(max_length=120)
    phone: str
    whatsapp: Optional[str] = None
    country_code: str = Field(default='+91', max_length=5)
    state: str = Field(max_length=80)

    @field_validator('full_name', 'state')
    @classmethod
    def strip_text(cls, value, info):
        value = value.strip()
        if info.field_name == 'full_name' and len(value) < 3:
            raise PydanticCustomError('short_name', 'Full name must be at least 3 characters')
        return value

    @field_validator('email')
    @classmethod
    def check_email(cls, value):
        return normalize_email(value)

    @field_validator('phone', mode='before')
    @classmethod
    def check_phone(cls, value):
        return normalize_phone(value)

    @field_validator('whatsapp', mode='before')
    @classmethod
    def check_whatsapp(cls, value):
        return normalize_phone(value, 'whatsapp number') if not is_blank(value) else None

    @field_validator('weight')
    @classmethod
    def check_weight(cls, value):
        if value < MIN_DONOR_WEIGHT:
            raise PydanticCustomError(
                'weight_too_low', 'The minimum allowed weight is {minimum}', {'minimum': MIN_DONOR_WEIGHT}
            )
        return value

    @field_validator('dob')
    @classmethod
    def check_dob(cls, value):
        if value >= date.today():
            raise PydanticCustomError('invalid_dob', 'Date of birth must be in the past')
        return value

    @property
    def contact_email(self):
        return self.email

    @property
    def contact_phone(self):
        return self.phone

    def to_account_fields(self):
        return {
            'full_name': self.full_name,
            'dob': self.dob,
            'weight': self.weight,
            'blood_group': self.blood_group.value,
            'email': self.email,
            'country_code': self.country_code,
            'phone': self.phone,
            'whatsapp': self.whatsapp,
            'state': self.state
        }


class CampAddress(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra='ignore')

    address_line1: str = Field(max_length=255)
    address_line2: Optional[str] = Field(default=None, max_length=255)
    state: str = Field(max_length=80)
    city: str = Field(max_length=80)
    pincode: str

    @field_validator('pincode', mode='before')
    @classmethod
    def check_pincode(cls, value):
        value = str(value).strip()
        if not value.isdigit() or len(value) != 6:
            raise PydanticCustomError('invalid_pincode', '{value} is not a valid pincode', {'value': value})
        return value


class CampRegistration(RegistrationPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = (
        'organizationName', 'organizationType', 'organizerName', 'organizerMobileNumber',
        'organizerEmail', 'campName', 'campDate', 'campStartTime', 'address',
        'campEndTime', 'estimatedParticipants', 'password', 'confirmPassword'
    )
    HAS_ADDRESS: ClassVar[bool] = True

    organization_name: str = Field(max_length=150)
    organization_type: str = Field(max_length=80)
    organizer_name: str = Field(max_length=100)
    organizer_mobile_number: str
    organizer_email: str = Field(max_length=120)
    co_organizer_name: Optional[str] = Field(default=None, max_length=100)
    co_organizer_mobile_number: Optional[str] = None
    camp_name: str = Field(max_length=150)
    address: CampAddress
    bloodbank: Optional[str] = Field(default=None, max_length=150)
    camp_date: date
    camp_start_time: time
    camp_end_time: time
    estimated_participants: int
    supporter: Optional[str] = Field(default=None, max_length=150)
    remarks: Optional[str] = None

    @field_validator('organizer_email')
    @classmethod
    def check_email(cls, value):
        return normalize_email(value)

    @field_validator('organizer_mobile_number', mode='before')
    @classmethod
    def check_mobile(cls, value):
        return normalize_phone(value, 'mobile number')

    @field_validator('co_organizer_mobile_number', mode='before')
    @classmethod
    def check_co_mobile(cls, value):
        return normalize_phone(value, 'mobile number') if not is_blank(value) else None

    @field_validator('estimated_participants')
    @classmethod
    def check_participants(cls, value):
        if value <= 0:
            raise PydanticCustomError('invalid_participants', 'Estimated participants must be a positive number')
        return value

    @field_validator('camp_date')
    @classmethod
    def check_camp_date(cls, value):
        if value < date.today():
            raise PydanticCustomError('invalid_camp_date', 'Camp date cannot be in the past')
        return value

    @model_validator(mode='after')
    def check_schedule(self):
        if self.camp_end_time <= self.camp_start_time:
            raise PydanticCustomError('invalid_schedule', 'Camp end time must be after start time')
        return self

    @property
    def contact_email(self):
        return self.organizer_email

    @property
    def contact_phone(self):
        return self.organizer_mobile_number

    def to_account_fields(self):
        return {
            'organization_name': self.organization_name,
            'organization_type': self.organization_type,
            'organizer_name': self.organizer_name,
            'organizer_mobile_number': self.organizer_mobile_number,
            'organizer_email': self.organizer_email,
            'co_organizer_name': self.co_organizer_name,
            'co_organizer_mobile_number': self.co_organizer_mobile_number,
            'camp_name': self.camp_name,
            'address_line1': self.address.address_line1,
            'address_line2': self.address.address_line2,
            'state': self.address.state,
            'city': self.address.city,
            'pincode': self.address.pincode,
            'address_type': 'Camp',
            'blood_bank': self.bloodbank,
            'camp_date': self.camp_date,
            'camp_start_time': self.camp_start_time,
            'camp_end_time': self.camp_end_time,
            'estimated_participants': self.estimated_participants,
            'supporter': self.supporter,
            'remarks': self.remarks
        }
