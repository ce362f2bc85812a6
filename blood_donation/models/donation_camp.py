from blood_donation.extensions import db
from blood_donation.constants import AccountKind
from blood_donation.models.account import AccountMixin, hash_password_if_changed
from datetime import datetime
from sqlalchemy import event
import enum


class ApprovalStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DonationCamp(AccountMixin, db.Model):
    """Organizer account for a donation camp, awaiting blood bank approval on creation"""
    __tablename__ = 'donation_camps'

    kind = AccountKind.CAMP
    email_attr = 'organizer_email'
    phone_attr = 'organizer_mobile_number'

    id = db.Column(db.Integer, primary_key=True)
    organization_name = db.Column(db.String(150), nullable=False)
    organization_type = db.Column(db.String(80), nullable=False)
    organizer_name = db.Column(db.String(100), nullable=False)
    organizer_mobile_number = db.Column(db.String(10), unique=True, nullable=False)
    organizer_email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    co_organizer_name = db.Column(db.String(100), nullable=True)
    co_organizer_mobile_number = db.Column(db.String(10), nullable=True)
    camp_name = db.Column(db.String(150), nullable=False)

    address_line1 = db.Column(db.String(255), nullable=False)
    address_line2 = db.Column(db.String(255), nullable=True)
    state = db.Column(db.String(80), nullable=False)
    city = db.Column(db.String(80), nullable=False)
    pincode = db.Column(db.String(10), nullable=False)
    address_type = db.Column(db.String(20), nullable=False, default='Camp')

    blood_bank = db.Column(db.String(150), nullable=True)
    camp_date = db.Column(db.Date, nullable=False)
    camp_start_time = db.Column(db.Time, nullable=False)
    camp_end_time = db.Column(db.Time, nullable=False)
    estimated_participants = db.Column(db.Integer, nullable=False)
    supporter = db.Column(db.String(150), nullable=True)
    remarks = db.Column(db.Text, nullable=True)

    password = db.deferred(db.Column(db.String(255), nullable=False))
    email_verified = db.Column(db.Boolean, default=False, nullable=False)
    approval_status = db.Column(db.Enum(ApprovalStatus), nullable=False, default=ApprovalStatus.PENDING)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    donations = db.relationship('Donation', backref='camp', lazy=True)

    def token_claims(self):
        return {
            'organizerName': self.organizer_name,
            'campName': self.camp_name,
            'email': self.organizer_email
        }

    def to_dict(self):
        return {
            'id': self.id,
            'organizationName': self.organization_name,
            'organizationType': self.organization_type,
            'organizerName': self.organizer_name,
            'organizerMobileNumber': self.organizer_mobile_number,
            'organizerEmail': self.organizer_email,
            'coOrganizerName': self.co_organizer_name,
            'coOrganizerMobileNumber': self.co_organizer_mobile_number,
            'campName': self.camp_name,
            'address': {
                'addressLine1': self.address_line1,
                'addressLine2': self.address_line2,
                'state': self.state,
                'city': self.city,
                'pincode': self.pincode,
                'addressType': self.address_type
            },
            'bloodbank': self.blood_bank,
            'campDate': self.camp_date.isoformat(),
            'campStartTime': self.camp_start_time.strftime('%H:%M'),
            'campEndTime': self.camp_end_time.strftime('%H:%M'),
            'estimatedParticipants': self.estimated_participants,
            'supporter': self.supporter,
            'remarks': self.remarks,
            'emailVerified': self.email_verified,
            'approvalStatus': self.approval_status.value,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<DonationCamp {self.camp_name} ({self.organizer_email})>'


event.listen(DonationCamp, 'before_insert', hash_password_if_changed)
event.listen(DonationCamp, 'before_update', hash_password_if_changed)
