from blood_donation.errors.exceptions import (
    ApiError, ValidationError, AuthError, UnauthorizedError,
    NotFoundError, ConflictError, InternalError
)

__all__ = [
    'ApiError', 'ValidationError', 'AuthError', 'UnauthorizedError',
    'NotFoundError', 'ConflictError', 'InternalError'
]
