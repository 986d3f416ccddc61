"""Domain exceptions raised by services.

API exception handlers map each class to its HTTP status and the
``{status: false, message, error}`` envelope.
"""

from typing import Any


class EcoBreakError(Exception):
    """Base class for expected, client-visible failures."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(EcoBreakError):
    """The request is well-formed but violates a business rule."""

    status_code = 400
    error = "Bad Request"


class UnauthorizedError(EcoBreakError):
    """Missing or invalid credentials."""

    status_code = 401
    error = "Unauthorized"


class NotFoundError(EcoBreakError):
    """A referenced document does not exist."""

    status_code = 404
    error = "Not Found"


class ExternalServiceError(EcoBreakError):
    """A Google/Firebase API call failed."""

    status_code = 502
    error = "Bad Gateway"
