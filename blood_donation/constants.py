import enum

ACCESS_TOKEN_COOKIE = 'accessToken'
REFRESH_TOKEN_COOKIE = 'refreshToken'

OTP_LENGTH = 6
OTP_TYPE_VERIFICATION = 'verification'

# Per-route ceilings enforced by Flask-Limiter
OTP_RATE_LIMIT = "50 per hour"
REGISTER_RATE_LIMIT = "50 per hour"
LOGIN_RATE_LIMIT = "10 per minute"
SESSION_RATE_LIMIT = "30 per minute"

MIN_DONOR_WEIGHT = 45


class BloodGroup(str, enum.Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


class AccountKind(str, enum.Enum):
    DONOR = "donor"
    CAMP = "camp"
