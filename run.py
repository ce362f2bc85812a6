"""
Development/Local Entry Point
==============================
Usage: python run.py

Serves the donor (/api/v1/doners) and donation camp (/api/v1/camps) APIs.
For production, use wsgi.py with Gunicorn instead.
"""
import os
import sys
from dotenv import load_dotenv
from blood_donation import create_app
from blood_donation.extensions import db

load_dotenv()

# Both session signing secrets are required
REQUIRED_ENV_VARS = ['ACCESS_TOKEN_SECRET', 'REFRESH_TOKEN_SECRET']
missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var)]
if missing:
    print(f"ERROR: Missing required environment variables: {', '.join(missing)}")
    print("Set them in .env; access and refresh tokens must use different secrets.")
    sys.exit(1)

app = create_app(os.getenv('FLASK_ENV', 'development'))

if __name__ == "__main__":
    if os.getenv('CREATE_TABLES', 'false').lower() in ['true', '1']:
        with app.app_context():
            db.create_all()
            app.logger.info("Database tables created")

    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)), debug=app.config.get('DEBUG', False))
