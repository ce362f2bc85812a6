"""Session issuance: signed access/refresh tokens and the cookies carrying them.

Secrets and lifetimes are read once from the app config into an immutable
``SessionSettings`` when the app is created; the ``TokenIssuer`` built from it
lives in ``app.extensions`` and is the only code that signs or verifies tokens.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from flask import current_app
import jwt
from blood_donation.constants import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from blood_donation.errors import InternalError, UnauthorizedError

ACCESS = 'access'
REFRESH = 'refresh'


@dataclass(frozen=True)
class SessionSettings:
    access_secret: str
    refresh_secret: str
    access_ttl: timedelta
    refresh_ttl: timedelta
    cookie_secure: bool = True
    cookie_samesite: str = 'None'
    algorithm: str = 'HS256'

    @classmethod
    def from_config(cls, config):
        return cls(
            access_secret=config['ACCESS_TOKEN_SECRET'],
            refresh_secret=config['REFRESH_TOKEN_SECRET'],
            access_ttl=config['ACCESS_TOKEN_EXPIRES'],
            refresh_ttl=config['REFRESH_TOKEN_EXPIRES'],
            cookie_secure=config['COOKIE_SECURE'],
            cookie_samesite=config['COOKIE_SAMESITE'],
        )


class TokenIssuer:
    def __init__(self, settings):
        self.settings = settings

    def _secret_and_ttl(self, token_type):
        if token_type == ACCESS:
            return self.settings.access_secret, self.settings.access_ttl
        return self.settings.refresh_secret, self.settings.refresh_ttl

    def _encode(self, claims, token_type):
        secret, ttl = self._secret_and_ttl(token_type)
        now = datetime.now(timezone.utc)
        payload = dict(claims, type=token_type, iat=now, exp=now + ttl)
        return jwt.encode(payload, secret, algorithm=self.settings.algorithm)

    def issue_access_token(self, account):
        claims = {'sub': str(account.id), 'kind': account.kind.value}
        claims.update(account.token_claims())
        return self._encode(claims, ACCESS)

    def issue_refresh_token(self, account):
        return self._encode({'sub': str(account.id), 'kind': account.kind.value}, REFRESH)

    def issue_pair(self, account):
        access_token = self.issue_access_token(account)
        refresh_token = self.issue_refresh_token(account)
        if not access_token or not refresh_token:
            raise InternalError('Token generation failed')
        return access_token, refresh_token

    def decode(self, token, token_type=ACCESS):
        secret, _ = self._secret_and_ttl(token_type)
        try:
            claims = jwt.decode(token, secret, algorithms=[self.settings.algorithm])
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError('Token has expired')
        except jwt.InvalidTokenError:
            raise UnauthorizedError('Invalid token')
        if claims.get('type') != token_type:
            raise UnauthorizedError('Invalid token')
        return claims

    def set_cookies(self, response, access_token, refresh_token):
        for name, value, ttl in (
            (ACCESS_TOKEN_COOKIE, access_token, self.settings.access_ttl),
            (REFRESH_TOKEN_COOKIE, refresh_token, self.settings.refresh_ttl),
        ):
            response.set_cookie(
                name, value,
                max_age=int(ttl.total_seconds()),
                httponly=True,
                secure=self.settings.cookie_secure,
                samesite=self.settings.cookie_samesite
            )
        return response

    def clear_cookies(self, response):
        for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
            response.delete_cookie(
                name,
                httponly=True,
                secure=self.settings.cookie_secure,
                samesite=self.settings.cookie_samesite
            )
        return response


def init_token_issuer(app):
    app.extensions['token_issuer'] = TokenIssuer(SessionSettings.from_config(app.config))


def get_token_issuer():
    return current_app.extensions['token_issuer']
