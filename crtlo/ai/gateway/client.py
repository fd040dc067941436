"""Async client for Workers AI chat completions routed through ChittyGateway."""

import json

import httpx
from pydantic import ValidationError

from crtlo.ai.gateway.config import GatewaySettings
from crtlo.ai.gateway.exceptions import (
    GatewayConfigurationError,
    GatewayRequestError,
    GatewayResponseError,
)
from crtlo.ai.gateway.schemas import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
)
from crtlo.utils.logger import logger


class ChittyGatewayClient:
    """Async client for the ChittyGateway chat completion endpoint.

    One call per completion; no retries. Any failure surfaces as a
    GatewayError subclass.
    """

    def __init__(
        self,
        settings: GatewaySettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Gateway settings
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def chat_completion(
        self, messages: list[ChatMessage], json_mode: bool = False
    ) -> str:
        """Run a chat completion and return the model's text.

        Args:
            messages: System and user messages
            json_mode: Ask the model for a JSON object response

        Returns:
            str: The completion text

        Raises:
            GatewayConfigurationError: API key or account id missing
            GatewayRequestError: Transport failure or non-2xx status
            GatewayResponseError: Malformed body or success=false
        """
        if not self.settings.api_key:
            raise GatewayConfigurationError(
                "CHITTY_API_KEY or CLOUDFLARE_API_TOKEN is required"
            )
        if not self.settings.account_id:
            raise GatewayConfigurationError("CLOUDFLARE_ACCOUNT_ID is required")

        payload = ChatCompletionRequest(
            messages=messages,
            response_format={"type": "json_object"} if json_mode else None,
        )
        client = self._ensure_client()

        logger.debug(
            "Sending chat completion",
            model=self.settings.model,
            json_mode=json_mode,
            message_count=len(messages),
        )

        try:
            response = await client.post(
                self.settings.completion_url(),
                json=payload.model_dump(mode="json", exclude_none=True),
                headers={
                    "Authorization": f"Bearer {self.settings.api_key}",
                    "Content-Type": "application/json",
                },
            )
        except httpx.RequestError as e:
            raise GatewayRequestError(
                f"ChittyGateway request failed: {e}", original_error=e
            ) from e

        if not response.is_success:
            raise GatewayRequestError(
                f"ChittyGateway request failed: {response.status_code} - {response.text}",
                upstream_status=response.status_code,
                response_text=response.text,
            )

        try:
            data = ChatCompletionResponse.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as e:
            raise GatewayResponseError(
                f"ChittyGateway returned an invalid response: {e}", original_error=e
            ) from e

        if not data.success:
            raise GatewayResponseError(
                f"ChittyGateway error: {json.dumps(data.errors)}", errors=data.errors
            )

        completion = data.result.response if data.result else None
        if completion is None:
            return ""
        if isinstance(completion, str):
            return completion
        return json.dumps(completion)
