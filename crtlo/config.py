from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "dev"
    STAGING = "staging"
    PRODUCTION = "prod"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current environment (dev, staging, or prod)",
    )
    client_base_url: str = Field(
        default="http://localhost:5000", description="Frontend base URL"
    )

    # Data ownership
    open_access: bool = Field(
        default=True,
        description="Serve data routes without a login, owned by data_user_id",
    )
    data_user_id: str = Field(
        default="anonymous",
        description="Owner id for all records while open_access is enabled",
    )

    # Payments are disabled, but production still refuses to boot without a key
    stripe_secret_key: str | None = Field(
        default=None, description="Stripe secret key"
    )

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def set_app_settings(settings: AppSettings) -> None:
    global _app_settings
    _app_settings = settings


def get_client_base_url() -> str:
    """Get the client base URL from settings."""
    settings = get_app_settings()
    return settings.client_base_url
