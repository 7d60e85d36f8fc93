"""Error taxonomy for auth endpoints and gates; each maps to one HTTP status."""

from fastapi import status


class AuthServiceError(Exception):
    """Base for every expected failure; rendered as {"error": message}."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AuthServiceError):
    """Caller supplied malformed or incomplete input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AuthServiceError):
    """Duplicate unique key (e.g. email already registered)."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AuthServiceError):
    """Missing or invalid credentials or token. Messages stay generic."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AuthServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AuthServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AuthServiceError):
    """Anything unexpected; the real cause is only logged server-side."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


class ServiceUnavailable(AuthServiceError):
    """A dependency (e.g. the database) is not configured."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
