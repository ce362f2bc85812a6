from flask import current_app
from blood_donation.errors import AuthError, NotFoundError, UnauthorizedError
from blood_donation.extensions import db
from blood_donation.services.session import REFRESH


def authenticate(account_model, email, password):
    """Return the account for ``email`` if ``password`` matches its secret"""
    account = account_model.find_by_email(email, with_password=True)
    if not account:
        raise NotFoundError('User not found')
    if not account.check_password(password):
        current_app.logger.info(f"Failed login for {account.kind.value} {account.id}")
        raise AuthError('Invalid credentials')
    return account


def load_from_claims(account_model, claims):
    if claims.get('kind') != account_model.kind.value:
        raise UnauthorizedError('Invalid token')
    try:
        account_id = int(claims['sub'])
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError('Invalid token')
    account = account_model.find_by_id(account_id)
    if not account:
        raise UnauthorizedError('Invalid token')
    return account


def refresh_session(account_model, refresh_token, issuer):
    """Exchange a refresh token for a new token pair"""
    if not refresh_token:
        raise UnauthorizedError('Invalid refresh token')
    try:
        claims = issuer.decode(refresh_token, REFRESH)
        account = load_from_claims(account_model, claims)
    except UnauthorizedError:
        raise UnauthorizedError('Invalid refresh token')
    access_token, new_refresh_token = issuer.issue_pair(account)
    return account, access_token, new_refresh_token


def change_password(account, payload):
    if not account.check_password(payload.old_password):
        raise AuthError('Invalid old password')
    try:
        account.set_password(payload.new_password)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(f"Password changed for {account.kind.value} {account.id}")
