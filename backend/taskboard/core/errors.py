"""Request-scoped failures and the HTTP status each one maps to."""

from __future__ import annotations


class ApiError(Exception):
    status_code: int = 500
    default_message: str = "Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class DuplicateError(ApiError):
    """A unique value (e.g. email) is already taken."""

    status_code = 400
    default_message = "Duplicate field value entered"


class AuthenticationError(ApiError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = 401
    default_message = "Not authorized to access this route"


class AuthorizationError(ApiError):
    """Authenticated, but not permitted to act on the resource."""

    status_code = 403
    default_message = "Not authorized to perform this action"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"
