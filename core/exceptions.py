"""
Typed failures raised by the service layer.

Each class carries the HTTP status code and a stable error code, so the
boundary in main.py can translate any of them into a response without
knowing where it was raised.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for failures that map to exactly one HTTP status."""

    status_code: int = 400
    error_code: str = "bad_request"
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


# Authentication failures (401)

class AuthenticationError(ServiceError):
    status_code = 401
    error_code = "unauthorized"
    message = "Could not validate credentials."


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password. The two cases are never told apart."""
    error_code = "invalid_credentials"
    message = "Incorrect email or password"


class MissingHeaderError(AuthenticationError):
    error_code = "missing_header"
    message = "Authorization header is missing"


class MalformedHeaderError(AuthenticationError):
    error_code = "malformed_header"
    message = "Authorization header must use the Bearer scheme"


class InvalidSignatureError(AuthenticationError):
    error_code = "invalid_signature"
    message = "Invalid token"


class TokenExpiredError(AuthenticationError):
    error_code = "token_expired"
    message = "Token expired"


class WrongIssuerError(AuthenticationError):
    error_code = "wrong_issuer"
    message = "Invalid token issuer"


class RefreshTokenNotFoundError(AuthenticationError):
    error_code = "token_not_found"
    message = "Refresh token not found"


class TokenRevokedError(AuthenticationError):
    error_code = "token_revoked"
    message = "Refresh token revoked"


# Authorization and resource failures

class ForbiddenError(ServiceError):
    status_code = 403
    error_code = "forbidden"
    message = "You are not the owner of this resource"


class NotFoundError(ServiceError):
    status_code = 404
    error_code = "not_found"
    message = "Resource not found"


class ConflictError(ServiceError):
    status_code = 409
    error_code = "conflict"
    message = "Resource already exists"


class BadRequestError(ServiceError):
    status_code = 400
    error_code = "bad_request"


class StorageFailureError(ServiceError):
    """Wraps any database error. The detail is logged, never returned."""
    status_code = 500
    error_code = "storage_failure"
    message = "Internal server error"


__all__ = [
    "ServiceError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "MissingHeaderError",
    "MalformedHeaderError",
    "InvalidSignatureError",
    "TokenExpiredError",
    "WrongIssuerError",
    "RefreshTokenNotFoundError",
    "TokenRevokedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "BadRequestError",
    "StorageFailureError",
]
