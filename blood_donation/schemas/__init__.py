from blood_donation.schemas.base import Payload
from blood_donation.schemas.auth import (
    EmailOtpRequest, PhoneOtpRequest, OtpVerification, LoginRequest, ChangePasswordRequest
)
from blood_donation.schemas.registration import DonorRegistration, CampRegistration, CampAddress

__all__ = [
    'Payload', 'EmailOtpRequest', 'PhoneOtpRequest', 'OtpVerification', 'LoginRequest',
    'ChangePasswordRequest', 'DonorRegistration', 'CampRegistration', 'CampAddress'
]
