"""
Configuration management for the auth package.

This module handles environment variable configuration and validation
for OIDC login and server-side sessions using Pydantic settings.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from crtlo.auth.constants import OIDC_SCOPES, SameSite, TimeInSeconds
from crtlo.utils.logger import logger


class AuthSettings(BaseSettings):
    """Configuration for the auth system using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", populate_by_name=True
    )

    # Identity provider
    issuer_url: str | None = Field(
        default=None,
        validation_alias="CHITTY_ISSUER_URL",
        description="OIDC issuer; falls back to the ChittyAuth service URL",
    )
    auth_service_url: str = Field(
        default="https://auth.chittyos.com",
        validation_alias="CHITTYAUTH_SERVICE_URL",
        description="ChittyAuth service URL",
    )
    client_id: str | None = Field(
        default=None, validation_alias="CHITTY_CLIENT_ID", description="OIDC client ID"
    )
    client_secret: str | None = Field(
        default=None,
        validation_alias="CHITTY_CLIENT_SECRET",
        description="OIDC client secret for confidential clients",
    )
    allowed_domains: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CHITTY_DOMAINS", "ALLOWED_DOMAINS"),
        description="Comma-separated hostnames that may start a login",
    )
    callback_scheme: str = Field(
        default="https",
        validation_alias="AUTH_CALLBACK_SCHEME",
        description="Scheme used when building the callback URL",
    )
    discovery_cache_ttl: int = Field(
        default=TimeInSeconds.ONE_HOUR,
        validation_alias="OIDC_DISCOVERY_TTL",
        description="Seconds to memoize provider metadata and JWKS",
    )
    id_token_leeway: int = Field(
        default=30,
        validation_alias="OIDC_CLOCK_LEEWAY",
        description="Clock skew tolerated when validating ID tokens",
    )
    request_timeout: float = Field(
        default=10.0, validation_alias="OIDC_TIMEOUT", description="HTTP timeout"
    )

    # Session configuration
    session_secret: str | None = Field(
        default=None,
        validation_alias="SESSION_SECRET",
        description="Secret used to sign the session cookie",
    )
    session_ttl_seconds: int = Field(
        default=TimeInSeconds.ONE_WEEK,
        validation_alias="SESSION_TTL_SECONDS",
        description="Server-side session lifetime",
    )
    session_prune_interval_seconds: int = Field(
        default=900,
        validation_alias="SESSION_PRUNE_INTERVAL",
        description="Seconds between deletions of expired sessions; 0 disables",
    )

    # Cookie configuration - defaults to most secure settings
    cookie_name: str = Field(default="crtlo.sid", validation_alias="SESSION_COOKIE_NAME")
    cookie_secure: bool = Field(default=True, validation_alias="COOKIE_SECURE")
    cookie_samesite: SameSite = Field(
        default=SameSite.LAX, validation_alias="COOKIE_SAMESITE"
    )
    cookie_httponly: bool = Field(default=True, validation_alias="COOKIE_HTTPONLY")

    def get_issuer_url(self) -> str:
        return self.issuer_url or self.auth_service_url

    def get_allowed_domains(self) -> list[str]:
        """Get allowed login domains as a list; defaults to localhost."""
        if not self.allowed_domains:
            return ["localhost"]
        domains = [d.strip() for d in self.allowed_domains.split(",") if d.strip()]
        return domains or ["localhost"]

    def get_scope(self) -> str:
        return " ".join(OIDC_SCOPES)


# Global settings instance
_auth_settings: AuthSettings | None = None


def get_auth_settings() -> AuthSettings:
    """
    Get the global auth settings instance.

    Returns:
        AuthSettings: The global settings instance
    """
    global _auth_settings
    if _auth_settings is None:
        _auth_settings = AuthSettings()
        logger.info(
            "AuthSettings loaded",
            issuer=_auth_settings.get_issuer_url(),
            client_id=_auth_settings.client_id,
            domains=_auth_settings.get_allowed_domains(),
        )
    return _auth_settings


def set_auth_settings(settings: AuthSettings) -> None:
    """
    Set the global auth settings instance.

    Args:
        settings: The settings to set
    """
    global _auth_settings
    _auth_settings = settings
