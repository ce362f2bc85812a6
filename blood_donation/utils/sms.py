"""Twilio SMS delivery for phone verification codes."""

from flask import current_app
from twilio.rest import Client
from twilio.base.exceptions import TwilioRestException


def get_twilio_client():
    """Get Twilio client instance."""
    sid = current_app.config.get('TWILIO_ACCOUNT_SID')
    token = current_app.config.get('TWILIO_AUTH_TOKEN')
    if not sid or not token:
        raise ValueError("Twilio credentials not configured. Set TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN environment variables.")
    return Client(sid, token)


def send_otp_sms(phone, otp, expiry_minutes):
    """Send the code to ``phone`` (E.164). Returns True when Twilio accepted it."""
    if current_app.config.get('SMS_SUPPRESS_SEND'):
        current_app.logger.info(f"SMS sending suppressed for {phone}")
        return True

    try:
        message = get_twilio_client().messages.create(
            body=f"Your blood donation verification code is {otp}. It expires in {expiry_minutes} minutes.",
            from_=current_app.config.get('TWILIO_FROM_NUMBER'),
            to=phone
        )
    except ValueError as e:
        current_app.logger.warning(f"SMS service not configured: {e}")
        return False
    except TwilioRestException as e:
        current_app.logger.error(f"Twilio error sending OTP to {phone}: {e}")
        return False

    current_app.logger.info(f"OTP SMS sent to {phone}: {message.sid}")
    return True
