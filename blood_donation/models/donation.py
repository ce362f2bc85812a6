from blood_donation.extensions import db
from datetime import datetime
import enum


class RequestStatus(enum.Enum):
    OPEN = "open"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


class Donation(db.Model):
    """A unit of blood given by a donor, optionally at a camp"""
    __tablename__ = 'donations'

    id = db.Column(db.Integer, primary_key=True)
    donor_id = db.Column(db.Integer, db.ForeignKey('donors.id'), nullable=False, index=True)
    camp_id = db.Column(db.Integer, db.ForeignKey('donation_camps.id'), nullable=True)
    units = db.Column(db.Integer, nullable=False, default=1)
    donated_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Donation {self.id} by donor {self.donor_id}>'


class DonationRequest(db.Model):
    __tablename__ = 'donation_requests'

    id = db.Column(db.Integer, primary_key=True)
    donor_id = db.Column(db.Integer, db.ForeignKey('donors.id'), nullable=False, index=True)
    blood_group = db.Column(db.String(3), nullable=False)
    status = db.Column(db.Enum(RequestStatus), nullable=False, default=RequestStatus.OPEN)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
