from blood_donation.models.otp import OTP, OtpStatus, OtpChannel
from blood_donation.models.donor import Donor
from blood_donation.models.donation_camp import DonationCamp, ApprovalStatus
from blood_donation.models.donation import Donation, DonationRequest, RequestStatus

__all__ = [
    'OTP', 'OtpStatus', 'OtpChannel',
    'Donor', 'DonationCamp', 'ApprovalStatus',
    'Donation', 'DonationRequest', 'RequestStatus'
]
