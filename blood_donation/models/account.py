"""Behaviour shared by the two account kinds (donors and donation camps).

Both kinds keep their secret in a deferred ``password`` column: it is left
out of every load unless a query asks for it with ``undefer``. The save hook
below hashes it whenever the attribute changed, so plaintext never reaches
the database.
"""
from datetime import date
from sqlalchemy import inspect
from sqlalchemy.orm import undefer
from werkzeug.security import generate_password_hash, check_password_hash


def compute_age(dob, today=None):
    """Completed years between ``dob`` and ``today``"""
    today = today or date.today()
    return today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))


def hash_password_if_changed(mapper, connection, target):
    if inspect(target).attrs.password.history.has_changes():
        target.password = generate_password_hash(target.password)


class AccountMixin:
    kind = None
    tracks_phone_verification = False
    email_attr = None
    phone_attr = None

    @classmethod
    def _lookup(cls, attr, value, with_password=False):
        query = cls.query
        if with_password:
            query = query.options(undefer(cls.password))
        return query.filter(getattr(cls, attr) == value).first()

    @classmethod
    def find_by_email(cls, email, with_password=False):
        return cls._lookup(cls.email_attr, email, with_password)

    @classmethod
    def find_by_phone(cls, phone):
        return cls._lookup(cls.phone_attr, phone)

    @classmethod
    def find_by_id(cls, account_id, with_password=False):
        return cls._lookup('id', account_id, with_password)

    @classmethod
    def find_verified_by_contact(cls, address):
        """Account already verified for this email or phone, if any"""
        account = cls.find_by_email(address) or cls.find_by_phone(address)
        if account and account.is_contact_verified(address):
            return account
        return None

    def is_contact_verified(self, address):
        return self.email_verified

    def set_password(self, password):
        # Hashed by the save hook on flush
        self.password = password

    def check_password(self, password):
        return check_password_hash(self.password, password)
