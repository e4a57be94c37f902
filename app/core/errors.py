"""
Error taxonomy for the SATAS API.

Every failure reaches the client as ``{"error": "<message>"}`` with the status
code carried by the exception class.
"""

from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base exception for errors surfaced directly to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class AlreadyExists(BadRequest):
    default_message = "Resource already exists"


class AlreadyApplied(AlreadyExists):
    default_message = "You have already applied for this job"


class AlreadyRegistered(AlreadyExists):
    default_message = "You are already registered for this event"


class StoreUnavailable(AppError):
    default_message = "Data store unavailable"


class ProviderError(AppError):
    """The identity provider or object storage rejected a request."""

    default_message = "Upstream provider request failed"
