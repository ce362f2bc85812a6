from flask import Blueprint, request
from blood_donation.constants import (
    LOGIN_RATE_LIMIT, OTP_RATE_LIMIT, REGISTER_RATE_LIMIT, SESSION_RATE_LIMIT
)
from blood_donation.extensions import limiter
from blood_donation.middleware.auth import account_required
from blood_donation.models import Donor, OtpChannel
from blood_donation.routes import common
from blood_donation.schemas import DonorRegistration, EmailOtpRequest, PhoneOtpRequest
from blood_donation.services.registration import register_account
from blood_donation.services.session import get_token_issuer
from blood_donation.services.verification import issue_code
from blood_donation.utils.responses import api_response

bp = Blueprint('donors', __name__, url_prefix='/api/v1/doners')


@bp.route('/send-email-otp', methods=['POST'])
@limiter.limit(OTP_RATE_LIMIT)
def send_email_otp():
    """Send an email verification code to a prospective donor"""
    payload = EmailOtpRequest.parse(request.get_json(silent=True))
    issue_code(payload.email, OtpChannel.EMAIL, Donor)
    return api_response(200, {}, f"OTP sent successfully to {payload.email}")


@bp.route('/send-phone-otp', methods=['POST'])
@limiter.limit(OTP_RATE_LIMIT)
def send_phone_otp():
    """Send an SMS verification code to a prospective donor"""
    payload = PhoneOtpRequest.parse(request.get_json(silent=True))
    issue_code(payload.phone, OtpChannel.PHONE, Donor)
    return api_response(200, {}, f"OTP sent successfully to {payload.phone}")


@bp.route('/verify-otp', methods=['POST'])
@limiter.limit(OTP_RATE_LIMIT)
def verify_otp():
    return common.verify_otp()


@bp.route('/register-doner', methods=['POST'])
@limiter.limit(REGISTER_RATE_LIMIT)
def register_doner():
    """Register a donor whose email has been verified"""
    payload = DonorRegistration.parse(request.get_json(silent=True))
    issuer = get_token_issuer()
    donor, access_token, refresh_token = register_account(Donor, payload, issuer)
    response = api_response(201, donor.to_dict(), 'User registered successfully')
    return issuer.set_cookies(response, access_token, refresh_token)


@bp.route('/login', methods=['POST'])
@limiter.limit(LOGIN_RATE_LIMIT)
def login():
    return common.login(Donor)


@bp.route('/logout', methods=['GET'])
@limiter.limit(SESSION_RATE_LIMIT)
def logout():
    return common.logout()


@bp.route('/refresh-token', methods=['POST'])
@limiter.limit(SESSION_RATE_LIMIT)
def refresh_token():
    return common.refresh(Donor)


@bp.route('/change-password', methods=['PUT'])
@limiter.limit(SESSION_RATE_LIMIT)
@account_required(Donor)
def change_password(donor):
    return common.update_password(donor)


@bp.route('/get-user', methods=['GET'])
@limiter.limit(SESSION_RATE_LIMIT)
@account_required(Donor)
def get_user(donor):
    return common.profile(donor)
