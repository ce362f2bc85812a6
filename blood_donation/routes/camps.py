from flask import Blueprint, request
from blood_donation.constants import (
    LOGIN_RATE_LIMIT, OTP_RATE_LIMIT, REGISTER_RATE_LIMIT, SESSION_RATE_LIMIT
)
from blood_donation.extensions import limiter
from blood_donation.middleware.auth import account_required
from blood_donation.models import DonationCamp, OtpChannel
from blood_donation.routes import common
from blood_donation.schemas import CampRegistration, EmailOtpRequest
from blood_donation.services.registration import register_account
from blood_donation.services.session import get_token_issuer
from blood_donation.services.verification import issue_code
from blood_donation.utils.responses import api_response

bp = Blueprint('camps', __name__, url_prefix='/api/v1/camps')


@bp.route('/send-email-otp', methods=['POST'])
@limiter.limit(OTP_RATE_LIMIT)
def send_email_otp():
    """Send an email verification code to a camp organizer"""
    payload = EmailOtpRequest.parse(request.get_json(silent=True))
    issue_code(payload.email, OtpChannel.EMAIL, DonationCamp)
    return api_response(200, {}, f"OTP sent successfully to {payload.email}")


@bp.route('/verify-otp', methods=['POST'])
@limiter.limit(OTP_RATE_LIMIT)
def verify_otp():
    return common.verify_otp()


@bp.route('/register-camp', methods=['POST'])
@limiter.limit(REGISTER_RATE_LIMIT)
def register_camp():
    """Register a donation camp; it stays pending until a blood bank approves it"""
    payload = CampRegistration.parse(request.get_json(silent=True))
    issuer = get_token_issuer()
    camp, access_token, refresh_token = register_account(DonationCamp, payload, issuer)
    response = api_response(
        201, camp.to_dict(),
        'Donation Camp registered successfully, Awaiting blood bank approval'
    )
    return issuer.set_cookies(response, access_token, refresh_token)


@bp.route('/login', methods=['POST'])
@limiter.limit(LOGIN_RATE_LIMIT)
def login():
    return common.login(DonationCamp)


@bp.route('/logout', methods=['GET'])
@limiter.limit(SESSION_RATE_LIMIT)
def logout():
    return common.logout()


@bp.route('/refresh-token', methods=['POST'])
@limiter.limit(SESSION_RATE_LIMIT)
def refresh_token():
    return common.refresh(DonationCamp)


@bp.route('/change-password', methods=['PUT'])
@limiter.limit(SESSION_RATE_LIMIT)
@account_required(DonationCamp)
def change_password(camp):
    return common.update_password(camp)


@bp.route('/get-user', methods=['GET'])
@limiter.limit(SESSION_RATE_LIMIT)
@account_required(DonationCamp)
def get_user(camp):
    return common.profile(camp)
