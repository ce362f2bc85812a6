"""
Production WSGI Entry Point
============================
Usage: gunicorn -w 4 -b 0.0.0.0:5000 wsgi:application

Session tokens are signed with ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET;
both must be set in the environment (or .env) before the workers start.
"""
import os
from dotenv import load_dotenv
from blood_donation import create_app

load_dotenv()

application = create_app(os.getenv('FLASK_ENV', 'production'))

for key in ('ACCESS_TOKEN_SECRET', 'REFRESH_TOKEN_SECRET'):
    if not os.getenv(key):
        application.logger.warning(f"{key} is not set; falling back to the built-in default")

# Gunicorn compatibility - 'app' alias
app = application
