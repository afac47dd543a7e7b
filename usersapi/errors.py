"""Error taxonomy for usersapi.

Every error a handler can surface is a subclass of ApiError, and every subclass
has an explicit entry in ERROR_STATUS_CODES. The API layer looks the exact type
up in that table, so adding a new error kind means adding a status code here.
"""

from typing import Dict, Optional, Type


class ApiError(Exception):
    """Base class for errors that map to an HTTP response."""

    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotFoundError(ApiError):
    message = "not found"


class WrongCredentialsError(ApiError):
    message = "Wrong credentials"


class MissingCredentialsError(ApiError):
    message = "Missing credentials"


class InvalidTokenError(ApiError):
    message = "Invalid token"


class TokenCreationError(ApiError):
    message = "Token creation error"


class CreateFailedError(ApiError):
    message = "failed to create user"


class StoreError(ApiError):
    """Wraps a database driver failure. The cause is logged, never returned."""

    message = "Internal server error"


class ConflictError(ApiError):
    message = "resource was modified concurrently"


class RequestTimeoutError(ApiError):
    message = "Request took too long"


ERROR_STATUS_CODES: Dict[Type[ApiError], int] = {
    NotFoundError: 404,
    WrongCredentialsError: 401,
    MissingCredentialsError: 400,
    InvalidTokenError: 401,
    TokenCreationError: 500,
    CreateFailedError: 500,
    StoreError: 500,
    ConflictError: 409,
    RequestTimeoutError: 408,
}


def status_code_for(error: ApiError) -> int:
    """Return the HTTP status code for an error instance."""
    return ERROR_STATUS_CODES[type(error)]
