"""
OpenID Connect client for the ChittyAuth provider.

Handles discovery, the authorization code grant with PKCE, refresh token
grants, ID token validation and the end-session URL. Provider metadata and
the JWKS are memoized in a TTL cache; two overlapping requests may both
fetch them, which is harmless.
"""

import base64
import hashlib
import json
import secrets
from typing import Any
from urllib.parse import urlencode

import httpx
import jwt
from cachetools import TTLCache
from pydantic import ValidationError

from crtlo.auth.config import AuthSettings
from crtlo.auth.constants import DISCOVERY_PATH, LOGIN_PROMPT
from crtlo.auth.exceptions import OIDCDiscoveryError, OIDCError, OIDCTokenError
from crtlo.auth.schemas import ProviderMetadata, TokenSet
from crtlo.utils.logger import logger

_METADATA_KEY = "metadata"
_JWKS_KEY = "jwks"


def generate_code_verifier() -> str:
    """PKCE code verifier (RFC 7636: 43-128 unreserved characters)."""
    return secrets.token_urlsafe(64)


def code_challenge_s256(code_verifier: str) -> str:
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


class OIDCClient:
    """Async OpenID Connect relying-party client."""

    def __init__(
        self,
        settings: AuthSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            settings: Auth settings (issuer, client credentials, cache TTL)
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._cache: TTLCache = TTLCache(maxsize=8, ttl=settings.discovery_cache_ttl)

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.request_timeout, transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _require_client_id(self) -> str:
        if not self.settings.client_id:
            raise OIDCError("CHITTY_CLIENT_ID is required for authentication")
        return self.settings.client_id

    async def _get_json(self, url: str) -> dict[str, Any]:
        client = self._ensure_client()
        try:
            response = await client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise OIDCDiscoveryError(
                f"GET {url} failed: {e.response.status_code}", original_error=e
            ) from e
        except (httpx.RequestError, json.JSONDecodeError) as e:
            raise OIDCDiscoveryError(f"GET {url} failed: {e}", original_error=e) from e

    # ========== Discovery ==========

    async def get_provider_metadata(self) -> ProviderMetadata:
        """Fetch the discovery document, memoized for the configured TTL."""
        cached = self._cache.get(_METADATA_KEY)
        if cached is not None:
            return cached

        issuer = self.settings.get_issuer_url().rstrip("/")
        document = await self._get_json(f"{issuer}{DISCOVERY_PATH}")
        try:
            metadata = ProviderMetadata.model_validate(document)
        except ValidationError as e:
            raise OIDCDiscoveryError(
                f"Invalid discovery document from {issuer}: {e}", original_error=e
            ) from e

        logger.info("OIDC discovery completed", issuer=metadata.issuer)
        self._cache[_METADATA_KEY] = metadata
        return metadata

    async def get_jwks(self) -> dict[str, Any]:
        """Fetch the provider's signing keys, memoized like the metadata."""
        cached = self._cache.get(_JWKS_KEY)
        if cached is not None:
            return cached

        metadata = await self.get_provider_metadata()
        if not metadata.jwks_uri:
            raise OIDCDiscoveryError("Provider metadata has no jwks_uri")
        jwks = await self._get_json(metadata.jwks_uri)
        self._cache[_JWKS_KEY] = jwks
        return jwks

    # ========== Authorization code flow ==========

    async def build_authorization_url(
        self, redirect_uri: str, state: str, nonce: str, code_verifier: str
    ) -> str:
        metadata = await self.get_provider_metadata()
        params = {
            "response_type": "code",
            "client_id": self._require_client_id(),
            "redirect_uri": redirect_uri,
            "scope": self.settings.get_scope(),
            "prompt": LOGIN_PROMPT,
            "state": state,
            "nonce": nonce,
            "code_challenge": code_challenge_s256(code_verifier),
            "code_challenge_method": "S256",
        }
        return f"{metadata.authorization_endpoint}?{urlencode(params)}"

    async def _token_request(self, data: dict[str, str]) -> TokenSet:
        metadata = await self.get_provider_metadata()
        data = {**data, "client_id": self._require_client_id()}
        if self.settings.client_secret:
            data["client_secret"] = self.settings.client_secret

        client = self._ensure_client()
        try:
            response = await client.post(
                metadata.token_endpoint,
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.RequestError as e:
            raise OIDCTokenError(
                f"Token request failed: {e}", original_error=e
            ) from e

        if not response.is_success:
            raise OIDCTokenError(
                f"Token request failed: {response.status_code} - {response.text}"
            )

        try:
            return TokenSet.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as e:
            raise OIDCTokenError(
                f"Invalid token response: {e}", original_error=e
            ) from e

    async def exchange_code(
        self, code: str, redirect_uri: str, code_verifier: str
    ) -> TokenSet:
        """Exchange an authorization code for tokens."""
        return await self._token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri,
                "code_verifier": code_verifier,
            }
        )

    async def refresh(self, refresh_token: str) -> TokenSet:
        """Run a refresh_token grant."""
        return await self._token_request(
            {"grant_type": "refresh_token", "refresh_token": refresh_token}
        )

    # ========== ID tokens ==========

    async def decode_id_token(
        self, id_token: str, nonce: str | None = None
    ) -> dict[str, Any]:
        """
        Validate an ID token's signature, issuer and audience and return its claims.

        Args:
            id_token: Compact JWT from the token endpoint
            nonce: Expected nonce; only checked when given

        Raises:
            OIDCTokenError: The token is invalid
        """
        metadata = await self.get_provider_metadata()
        jwks = await self.get_jwks()

        try:
            header = jwt.get_unverified_header(id_token)
            key_set = jwt.PyJWKSet.from_dict(jwks)
            kid = header.get("kid")
            candidates = [k for k in key_set.keys if kid is None or k.key_id == kid]
            if not candidates:
                raise OIDCTokenError(f"No signing key matches kid={kid}")

            claims = jwt.decode(
                id_token,
                key=candidates[0].key,
                algorithms=metadata.id_token_signing_alg_values_supported,
                audience=self._require_client_id(),
                issuer=metadata.issuer,
                leeway=self.settings.id_token_leeway,
            )
        except jwt.PyJWTError as e:
            raise OIDCTokenError(f"Invalid ID token: {e}", original_error=e) from e

        if nonce is not None and claims.get("nonce") != nonce:
            raise OIDCTokenError("ID token nonce mismatch")
        return claims

    # ========== Logout ==========

    async def build_end_session_url(self, post_logout_redirect_uri: str) -> str | None:
        """RP-initiated logout URL, or None when the provider has no end-session endpoint."""
        metadata = await self.get_provider_metadata()
        if not metadata.end_session_endpoint:
            return None
        params = {
            "client_id": self._require_client_id(),
            "post_logout_redirect_uri": post_logout_redirect_uri,
        }
        return f"{metadata.end_session_endpoint}?{urlencode(params)}"
