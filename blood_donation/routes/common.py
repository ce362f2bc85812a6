"""Handlers shared by the donor and camp blueprints.

Each blueprint keeps its own decorated route functions and delegates here
with the account model it serves.
"""
from flask import request, current_app
from blood_donation.constants import REFRESH_TOKEN_COOKIE
from blood_donation.schemas import ChangePasswordRequest, LoginRequest, OtpVerification
from blood_donation.services.accounts import authenticate, change_password, refresh_session
from blood_donation.services.session import get_token_issuer
from blood_donation.services.verification import verify_code
from blood_donation.utils.responses import api_response


def verify_otp():
    payload = OtpVerification.parse(request.get_json(silent=True))
    verify_code(payload.address, payload.otp)
    return api_response(200, {}, 'OTP verified successfully')


def login(account_model):
    payload = LoginRequest.parse(request.get_json(silent=True))
    account = authenticate(account_model, payload.email, payload.password)
    issuer = get_token_issuer()
    access_token, refresh_token = issuer.issue_pair(account)
    current_app.logger.info(f"{account.kind.value} {account.id} logged in")
    response = api_response(200, account.to_dict(), 'User logged in successfully')
    return issuer.set_cookies(response, access_token, refresh_token)


def logout():
    response = api_response(200, {}, 'User logged out successfully')
    return get_token_issuer().clear_cookies(response)


def refresh(account_model):
    body = request.get_json(silent=True) or {}
    token = request.cookies.get(REFRESH_TOKEN_COOKIE) or body.get('refreshToken')
    issuer = get_token_issuer()
    account, access_token, refresh_token = refresh_session(account_model, token, issuer)
    response = api_response(200, {}, 'Access token refreshed')
    return issuer.set_cookies(response, access_token, refresh_token)


def update_password(account):
    payload = ChangePasswordRequest.parse(request.get_json(silent=True))
    change_password(account, payload)
    return api_response(200, {}, 'Password changed successfully')


def profile(account):
    return api_response(200, account.to_dict(), 'User profile fetched')
