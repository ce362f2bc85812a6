"""Typed API errors raised by the workflows and rendered by the error handlers."""


class ApiError(Exception):
    """Base error carrying the HTTP status and the message shown to the caller."""

    status_code = 500
    default_message = 'Something went wrong'

    def __init__(self, message=None, errors=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.errors = errors or []
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {
            'statusCode': self.status_code,
            'message': self.message,
            'success': False,
            'errors': self.errors
        }


class ValidationError(ApiError):
    status_code = 400
    default_message = 'Bad request'


class AuthError(ApiError):
    """Wrong secret or one-time code."""
    status_code = 400
    default_message = 'Invalid credentials'


class UnauthorizedError(ApiError):
    status_code = 401
    default_message = 'Unauthorized request'


class NotFoundError(ApiError):
    status_code = 404
    default_message = 'Resource not found'


class ConflictError(ApiError):
    status_code = 409
    default_message = 'Resource already exists'


class InternalError(ApiError):
    status_code = 500
    default_message = 'An unexpected error occurred'
