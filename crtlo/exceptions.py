"""
Application error taxonomy.

Every error raised on purpose by the service derives from CRTLOError and
carries the HTTP status it maps to. Exception handlers in `crtlo.main`
serialize them as `{"message": ...}`.
"""

from http import HTTPStatus
from typing import Any


class CRTLOError(Exception):
    """Base exception for all service errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def __str__(self) -> str:
        return self.message


class ValidationError(CRTLOError):
    """Missing or malformed client input."""

    status_code = HTTPStatus.BAD_REQUEST


class UpstreamError(CRTLOError):
    """An external collaborator (AI gateway, identity provider) failed."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, details=details)
        self.original_error = original_error


class AuthError(CRTLOError):
    """Unauthenticated, expired, or insufficiently identified caller."""

    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ConfigError(CRTLOError):
    """A required setting is missing; raised during startup."""
