"""
Auth-specific Pydantic schemas.

Session payloads are stored as JSON in the session store, so everything
kept in a session is a plain Pydantic model.
"""

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from crtlo.schemas import CamelModel


class ProviderMetadata(BaseModel):
    """Subset of the OIDC discovery document the server relies on."""

    model_config = ConfigDict(extra="allow")

    issuer: str
    authorization_endpoint: str
    token_endpoint: str
    jwks_uri: str | None = None
    end_session_endpoint: str | None = None
    id_token_signing_alg_values_supported: list[str] = Field(
        default_factory=lambda: ["RS256"]
    )


class TokenSet(BaseModel):
    """Token endpoint response."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    expires_in: int | None = None
    scope: str | None = None


class SessionUser(BaseModel):
    """Authenticated identity and tokens kept in the session."""

    claims: dict[str, Any] = Field(default_factory=dict)
    access_token: str
    refresh_token: str | None = None
    id_token: str | None = None
    expires_at: int | None = Field(
        default=None, description="Access token expiry, seconds since epoch"
    )
    chitty_id: str | None = None

    @property
    def sub(self) -> str | None:
        return self.claims.get("sub")

    def is_expired(self, now: int | None = None) -> bool:
        if self.expires_at is None:
            return True
        current = int(time.time()) if now is None else now
        return current > self.expires_at


class PendingLogin(BaseModel):
    """Values generated at login and checked at the callback."""

    state: str
    nonce: str
    code_verifier: str
    redirect_uri: str


class SessionData(BaseModel):
    user: SessionUser | None = None
    pending_login: PendingLogin | None = None


class ChittyIDValidationResponse(BaseModel):
    id: str
    valid: bool


class ChittyIDResponse(CamelModel):
    chitty_id: str
    valid: bool = True
