from flask import jsonify
from werkzeug.exceptions import HTTPException
from blood_donation.errors.exceptions import ApiError
import traceback


def _error_response(status_code, message, errors=None):
    return jsonify({
        'statusCode': status_code,
        'message': message,
        'success': False,
        'errors': errors or []
    }), status_code


def register_error_handlers(app):
    """Register global error handlers so every failure leaves in the error envelope"""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            app.logger.error(f"API error {error.status_code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return _error_response(404, 'Resource not found')

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _error_response(405, 'Method not allowed')

    @app.errorhandler(400)
    def bad_request(error):
        return _error_response(400, str(error.description) if hasattr(error, 'description') else 'Bad request')

    @app.errorhandler(429)
    def too_many_requests(error):
        app.logger.warning(f"Rate limit exceeded: {error.description}")
        return _error_response(429, 'Too many requests, please try again later')

    @app.errorhandler(HTTPException)
    def http_exception(error):
        return _error_response(error.code or 500, error.description or error.name)

    @app.errorhandler(Exception)
    def handle_exception(e):
        """Catch-all for any unhandled exceptions - never expose internals"""
        app.logger.error(f"Unhandled Exception: {e}\n{traceback.format_exc()}")
        return _error_response(500, 'An unexpected error occurred. Please try again or contact support.')
