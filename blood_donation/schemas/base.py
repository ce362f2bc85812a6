"""Validated request payloads.

Every payload is a Pydantic model: it either constructs cleanly or fails with
the message the API sends back. Presence checks run first, in a fixed order,
before any individual field is parsed, so a request that is both incomplete
and malformed is reported as incomplete.
"""
import re
from typing import ClassVar, Tuple
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from blood_donation.errors import ValidationError

# Email validation regex
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

# Indian mobile numbers without country code
PHONE_REGEX = re.compile(r'^[0-9]{10}$')


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_email(value):
    value = value.strip().lower()
    if len(value) > 254 or not EMAIL_REGEX.match(value):
        raise PydanticCustomError('invalid_email', '{value} is not a valid email', {'value': value})
    return value


def normalize_phone(value, label='phone number'):
    value = str(value).strip()
    if not PHONE_REGEX.match(value):
        raise PydanticCustomError(
            'invalid_phone', '{value} is not a valid {label}', {'value': value, 'label': label}
        )
    return value


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra='ignore')

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ()
    MISSING_MESSAGE: ClassVar[str] = 'Please provide all the required fields'

    @model_validator(mode='before')
    @classmethod
    def run_prechecks(cls, data):
        if not isinstance(data, dict):
            raise PydanticCustomError('invalid_payload', 'Request body must be a JSON object')
        cls.precheck(data)
        return data

    @classmethod
    def precheck(cls, data):
        """Ordered checks on the raw body; subclasses extend and call super() first"""
        if any(is_blank(data.get(field)) for field in cls.REQUIRED_FIELDS):
            raise PydanticCustomError('missing_fields', cls.MISSING_MESSAGE)

    @classmethod
    def parse(cls, data):
        """Build the payload or raise ``ValidationError`` carrying the first failure"""
        try:
            return cls.model_validate(data if data is not None else {})
        except PydanticValidationError as exc:
            details = [
                {
                    'field': '.'.join(str(part) for part in error['loc']) or None,
                    'message': error['msg']
                }
                for error in exc.errors(include_url=False)
            ]
            raise ValidationError(details[0]['message'], errors=details) from None
