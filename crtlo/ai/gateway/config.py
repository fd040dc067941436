"""ChittyGateway (Cloudflare AI Gateway) configuration."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from crtlo.ai.gateway.constants import (
    DEFAULT_GATEWAY_BASE_URL,
    DEFAULT_GATEWAY_NAME,
    DEFAULT_MODEL,
)
from crtlo.utils.logger import logger


class GatewaySettings(BaseSettings):
    """Settings for the Workers AI endpoint behind ChittyGateway.

    Attributes:
        account_id: Cloudflare account that owns the gateway
        api_key: Bearer token; CHITTY_API_KEY wins over CLOUDFLARE_API_TOKEN
        model: Workers AI model identifier
        gateway_name: AI Gateway slug inside the account
        base_url: AI Gateway API root
        request_timeout: HTTP timeout in seconds
    """

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", populate_by_name=True
    )

    account_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CLOUDFLARE_ACCOUNT_ID"),
        description="Cloudflare account ID",
    )
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CHITTY_API_KEY", "CLOUDFLARE_API_TOKEN"),
        description="API token for the gateway",
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        validation_alias=AliasChoices("CHITTY_AI_MODEL"),
        description="Workers AI model",
    )
    gateway_name: str = Field(
        default=DEFAULT_GATEWAY_NAME,
        validation_alias=AliasChoices("CHITTY_GATEWAY_NAME"),
    )
    base_url: str = Field(
        default=DEFAULT_GATEWAY_BASE_URL,
        validation_alias=AliasChoices("CHITTY_GATEWAY_BASE_URL"),
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        validation_alias=AliasChoices("CHITTY_AI_TIMEOUT"),
        description="HTTP request timeout in seconds",
    )

    def completion_url(self) -> str:
        """Workers AI run endpoint routed through the gateway."""
        return (
            f"{self.base_url.rstrip('/')}/{self.account_id}/"
            f"{self.gateway_name}/workers-ai/{self.model}"
        )


_gateway_settings: GatewaySettings | None = None


def get_gateway_settings() -> GatewaySettings:
    """
    Get the global gateway settings instance.

    Returns:
        GatewaySettings: The global settings instance
    """
    global _gateway_settings
    if _gateway_settings is None:
        _gateway_settings = GatewaySettings()
        logger.info(
            "GatewaySettings loaded",
            model=_gateway_settings.model,
            api_key_configured=_gateway_settings.api_key is not None,
        )
    return _gateway_settings


def set_gateway_settings(settings: GatewaySettings) -> None:
    global _gateway_settings
    _gateway_settings = settings
