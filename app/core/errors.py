"""Application error taxonomy.

Services raise these; the handlers registered in ``app.main`` turn them into
``{"error": message}`` responses with the matching status code.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    """Referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AppError):
    """Unexpected store or runtime fault."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
