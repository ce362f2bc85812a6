import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ['true', 'on', '1']


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or (
        f"mysql+pymysql://{os.getenv('DB_USER')}:"
        f"{os.getenv('DB_PASSWORD')}@"
        f"{os.getenv('DB_HOST')}:3306/"
        f"{os.getenv('DB_NAME')}"
    )

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 280,
    }

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session tokens (access and refresh are signed with separate secrets)
    ACCESS_TOKEN_SECRET = os.environ.get('ACCESS_TOKEN_SECRET') or 'access-secret-change-in-production'
    REFRESH_TOKEN_SECRET = os.environ.get('REFRESH_TOKEN_SECRET') or 'refresh-secret-change-in-production'
    ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.environ.get('ACCESS_TOKEN_EXPIRY_MINUTES', 24 * 60)))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.environ.get('REFRESH_TOKEN_EXPIRY_DAYS', 10)))

    # Session cookies
    COOKIE_SECURE = _env_flag('COOKIE_SECURE', 'True')
    COOKIE_SAMESITE = os.environ.get('COOKIE_SAMESITE', 'None')

    # One-time codes
    OTP_EXPIRY_MINUTES = int(os.environ.get('OTP_EXPIRY_MINUTES', 10))
    DEFAULT_COUNTRY_CODE = os.environ.get('DEFAULT_COUNTRY_CODE', '+91')

    # Flask-Mail Configuration
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = _env_flag('MAIL_USE_TLS', 'True')
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', os.environ.get('MAIL_USERNAME'))

    # Twilio SMS
    TWILIO_ACCOUNT_SID = os.environ.get('TWILIO_ACCOUNT_SID')
    TWILIO_AUTH_TOKEN = os.environ.get('TWILIO_AUTH_TOKEN')
    TWILIO_FROM_NUMBER = os.environ.get('TWILIO_FROM_NUMBER')
    SMS_SUPPRESS_SEND = _env_flag('SMS_SUPPRESS_SEND', 'False')

    # Flask-Limiter
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_HEADERS_ENABLED = True

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    COOKIE_SECURE = _env_flag('COOKIE_SECURE', 'False')
    COOKIE_SAMESITE = os.environ.get('COOKIE_SAMESITE', 'Lax')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 280,
        "connect_args": {
            "ssl": {"ssl_mode": "REQUIRED"},
            "connect_timeout": 10
        }
    }


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    ACCESS_TOKEN_SECRET = 'test-access-secret'
    REFRESH_TOKEN_SECRET = 'test-refresh-secret'
    COOKIE_SECURE = False
    COOKIE_SAMESITE = 'Lax'
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'no-reply@blood-donation.test'
    SMS_SUPPRESS_SEND = True
    RATELIMIT_STORAGE_URI = 'memory://'


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
