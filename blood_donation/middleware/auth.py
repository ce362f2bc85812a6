from functools import wraps
from flask import request
from blood_donation.constants import ACCESS_TOKEN_COOKIE
from blood_donation.errors import UnauthorizedError
from blood_donation.services.accounts import load_from_claims
from blood_donation.services.session import ACCESS, get_token_issuer


def _request_token():
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header.split(' ', 1)[1].strip()
    return None


def account_required(account_model):
    """Decorator to require a valid access token for ``account_model`` and pass the account"""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = _request_token()
            if not token:
                raise UnauthorizedError('Unauthorized request')
            claims = get_token_issuer().decode(token, ACCESS)
            account = load_from_claims(account_model, claims)
            return fn(account, *args, **kwargs)
        return wrapper
    return decorator
