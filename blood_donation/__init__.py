from flask import Flask
from config import config
from blood_donation.extensions import db, migrate, cors, mail, limiter


def create_app(config_name='development'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)
    mail.init_app(app)
    limiter.init_app(app)

    # Signing secrets and lifetimes are frozen here, once
    from blood_donation.services.session import init_token_issuer
    init_token_issuer(app)

    # Register models and blueprints
    from blood_donation import models  # noqa: F401
    from blood_donation.routes import donors, camps
    app.register_blueprint(donors.bp)
    app.register_blueprint(camps.bp)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    # Register error handlers
    from blood_donation.errors import handlers
    handlers.register_error_handlers(app)

    return app
