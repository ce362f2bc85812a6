from blood_donation.extensions import db
from blood_donation.constants import AccountKind
from blood_donation.models.account import AccountMixin, compute_age, hash_password_if_changed
from datetime import datetime
from sqlalchemy import event


class Donor(AccountMixin, db.Model):
    __tablename__ = 'donors'

    kind = AccountKind.DONOR
    email_attr = 'email'
    phone_attr = 'phone'
    tracks_phone_verification = True

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(100), nullable=False)
    dob = db.Column(db.Date, nullable=False)
    age = db.Column(db.Integer, nullable=True)  # filled by the save hook
    weight = db.Column(db.Float, nullable=False)
    blood_group = db.Column(db.String(3), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    country_code = db.Column(db.String(5), nullable=False, default='+91')
    phone = db.Column(db.String(10), unique=True, nullable=False, index=True)
    whatsapp = db.Column(db.String(10), unique=True, nullable=True)
    state = db.Column(db.String(80), nullable=False)
    password = db.deferred(db.Column(db.String(255), nullable=False))
    email_verified = db.Column(db.Boolean, default=False, nullable=False)
    phone_verified = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    donations = db.relationship('Donation', backref='donor', lazy=True)
    donation_requests = db.relationship('DonationRequest', backref='donor', lazy=True)

    def is_contact_verified(self, address):
        if address == self.phone:
            return self.phone_verified
        return self.email_verified

    def token_claims(self):
        return {'fullName': self.full_name, 'email': self.email}

    def to_dict(self):
        return {
            'id': self.id,
            'fullName': self.full_name,
            'dob': self.dob.isoformat(),
            'age': self.age,
            'weight': self.weight,
            'bloodGroup': self.blood_group,
            'email': self.email,
            'countryCode': self.country_code,
            'phone': self.phone,
            'whatsapp': self.whatsapp,
            'state': self.state,
            'emailVerified': self.email_verified,
            'phoneVerified': self.phone_verified,
            'donationHistory': [donation.id for donation in self.donations],
            'donationRequestsHistory': [request.id for request in self.donation_requests],
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<Donor {self.email}>'


@event.listens_for(Donor, 'before_insert')
@event.listens_for(Donor, 'before_update')
def _before_save(mapper, connection, target):
    target.age = compute_age(target.dob)
    hash_password_if_changed(mapper, connection, target)
