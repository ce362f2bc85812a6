from threading import Thread
from flask_mail import Message
from blood_donation.extensions import mail
from flask import current_app
from datetime import datetime


def send_async_email(app, msg):
    with app.app_context():
        start_time = datetime.now()
        try:
            mail.send(msg)
            duration = (datetime.now() - start_time).total_seconds()
            app.logger.info(f"Sent email to {msg.recipients} (took {duration:.2f}s)")
        except Exception as e:
            app.logger.error(f"Error sending email to {msg.recipients}: {e}")


def send_otp_email(email, otp, expiry_minutes):
    """Send OTP to email asynchronously"""
    app = current_app._get_current_object()
    msg = Message(
        subject="Blood Donation - Your Verification Code",
        recipients=[email],
        body=(
            f"Your verification code is: {otp}\n\n"
            f"This code will expire in {expiry_minutes} minutes. "
            f"If you did not request it, you can ignore this email."
        )
    )
    Thread(target=send_async_email, args=(app, msg)).start()
    return True
