"""
Tests for request payload validation.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from blood_donation.errors import ValidationError
from blood_donation.schemas import (
    CampAddress, ChangePasswordRequest, DonorRegistration, EmailOtpRequest, LoginRequest, OtpVerification
)


def _message(schema, data):
    with pytest.raises(ValidationError) as exc_info:
        schema.parse(data)
    return exc_info.value.message


class TestPrecheckOrder:

    def test_missing_fields_reported_before_mismatch(self, donor_payload):
        payload = donor_payload(password='p1', confirmPassword='p2', fullName='')

        assert _message(DonorRegistration, payload) == 'All fields are required'

    def test_mismatch_reported_before_field_errors(self, donor_payload):
        payload = donor_payload(password='p1', confirmPassword='p2', weight=10, email='bad')

        assert _message(DonorRegistration, payload) == 'Passwords do not match'

    def test_whitespace_counts_as_missing(self, donor_payload):
        assert _message(DonorRegistration, donor_payload(state='   ')) == 'All fields are required'

    def test_non_object_body(self):
        assert _message(EmailOtpRequest, ['a@b.com']) == 'Request body must be a JSON object'


class TestDonorRegistration:

    def test_parses_camel_case_body(self, donor_payload):
        payload = DonorRegistration.parse(donor_payload(email='Mixed@Case.com', whatsapp='9876543210'))

        assert payload.email == 'mixed@case.com'
        assert payload.whatsapp == '9876543210'
        assert payload.country_code == '+91'
        assert payload.to_account_fields()['blood_group'] == 'O+'
        assert 'password' not in payload.to_account_fields()

    def test_blank_whatsapp_is_dropped(self, donor_payload):
        assert DonorRegistration.parse(donor_payload(whatsapp='')).whatsapp is None

    def test_invalid_whatsapp(self, donor_payload):
        message = _message(DonorRegistration, donor_payload(whatsapp='123'))

        assert message == '123 is not a valid whatsapp number'

    def test_short_name(self, donor_payload):
        assert _message(DonorRegistration, donor_payload(fullName='Al')) == 'Full name must be at least 3 characters'

    def test_future_dob(self, donor_payload):
        assert _message(DonorRegistration, donor_payload(dob='2999-01-01')) == 'Date of birth must be in the past'

    def test_errors_list_names_fields(self, donor_payload):
        with pytest.raises(ValidationError) as exc_info:
            DonorRegistration.parse(donor_payload(weight=30, email='nope'))

        fields = {error['field'] for error in exc_info.value.errors}
        assert fields == {'weight', 'email'}


class TestAuthPayloads:

    def test_login_lowercases_email(self):
        assert LoginRequest.parse({'email': ' Donor@Example.com ', 'password': 'x'}).email == 'donor@example.com'

    def test_verification_address_prefers_email(self):
        payload = OtpVerification.parse({'email': 'a@b.com', 'phone': '9876543210', 'otp': 123456})

        assert payload.address == 'a@b.com'
        assert payload.otp == '123456'

    def test_verification_by_phone(self):
        assert OtpVerification.parse({'phone': '9876543210', 'otp': '1'}).address == '9876543210'

    def test_verification_needs_an_address(self):
        assert _message(OtpVerification, {'otp': '123456'}) == 'Please provide all the required fields'

    def test_change_password_mismatch(self):
        data = {'oldPassword': 'a', 'newPassword': 'b', 'confirmPassword': 'c'}

        assert _message(ChangePasswordRequest, data) == 'Passwords do not match'

    def test_change_password_missing_field(self):
        data = {'oldPassword': 'a', 'newPassword': 'b'}

        assert _message(ChangePasswordRequest, data) == 'Please provide all the required fields'


class TestAliases:

    def test_snake_case_keys_are_not_accepted(self):
        with pytest.raises(PydanticValidationError):
            CampAddress.model_validate({
                'address_line1': '12 MG Road', 'state': 'Karnataka', 'city': 'Bengaluru', 'pincode': '560001'
            })

    def test_snake_case_body_is_reported_missing(self, donor_payload):
        payload = {
            'full_name' if key == 'fullName' else key: value for key, value in donor_payload().items()
        }

        assert _message(DonorRegistration, payload) == 'All fields are required'
