# backend/app/core/exceptions.py
"""
Error taxonomy for the auth service.

Service-level errors carry a status code and a message. The HTTP layer
decides the ``error`` label shown to clients (e.g. "Registration Failed")
by re-raising them as APIError.
"""
from fastapi import status


class QuizoraError(Exception):
    """Base exception for the Quizora backend."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal Server Error"

    def __init__(self, message: str = "An internal error occurred"):
        self.message = message
        super().__init__(message)


class APIError(QuizoraError):
    """
    Error with an explicit client-facing label.

    Rendered as ``{"error": error, "message": message}``.
    """

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.error = error


class BusinessValidationError(QuizoraError):
    """Input passed request binding but violates a business rule."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class ConflictError(QuizoraError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class AuthenticationError(QuizoraError):
    """Login failed. The message never says which factor was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str = "invalid credentials"):
        super().__init__(message)


class AuthorizationHeaderMissing(QuizoraError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str = "Authorization header is required"):
        super().__init__(message)


class AuthorizationHeaderMalformed(QuizoraError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str = "Invalid authorization header format"):
        super().__init__(message)


class TokenInvalidError(QuizoraError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class InactiveUserError(QuizoraError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str = "User not found or inactive"):
        super().__init__(message)
