"""ChittyGateway exceptions."""

from typing import Any

from crtlo.exceptions import UpstreamError


class GatewayError(UpstreamError):
    """Base exception for AI gateway failures."""


class GatewayConfigurationError(GatewayError):
    """Raised when the gateway cannot be called because settings are missing."""


class GatewayRequestError(GatewayError):
    """Raised for transport failures and non-2xx responses."""

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        response_text: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error=original_error)
        self.upstream_status = upstream_status
        self.response_text = response_text


class GatewayResponseError(GatewayError):
    """Raised when the gateway answers with an unusable body or success=false."""

    def __init__(
        self,
        message: str,
        errors: list[Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error=original_error)
        self.errors = errors or []
