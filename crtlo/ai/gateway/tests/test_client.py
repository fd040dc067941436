"""
Unit tests for ChittyGatewayClient.

HTTP traffic is served by httpx.MockTransport.
"""

import json

import httpx
import pytest

from crtlo.ai.gateway.client import ChittyGatewayClient
from crtlo.ai.gateway.config import GatewaySettings
from crtlo.ai.gateway.constants import ChatRole
from crtlo.ai.gateway.exceptions import (
    GatewayConfigurationError,
    GatewayRequestError,
    GatewayResponseError,
)
from crtlo.ai.gateway.schemas import ChatMessage

MESSAGES = [
    ChatMessage(role=ChatRole.SYSTEM, content="You are an RTLO expert."),
    ChatMessage(role=ChatRole.USER, content="How much notice before entry?"),
]


@pytest.fixture
def settings():
    return GatewaySettings(
        account_id="acct-123",
        api_key="test-key",
        model="@cf/meta/llama-3.1-70b-instruct",
        gateway_name="chittygateway",
        base_url="https://gateway.example.com/v1",
    )


def make_client(settings, handler):
    return ChittyGatewayClient(settings, transport=httpx.MockTransport(handler))


def test_completion_url(settings):
    assert settings.completion_url() == (
        "https://gateway.example.com/v1/acct-123/chittygateway/"
        "workers-ai/@cf/meta/llama-3.1-70b-instruct"
    )


@pytest.mark.asyncio
async def test_chat_completion_sends_messages_and_returns_text(settings):
    """The request carries the bearer token, messages and JSON response format."""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"result": {"response": "48 hours notice"}, "success": True}
        )

    client = make_client(settings, handler)
    text = await client.chat_completion(MESSAGES, json_mode=True)
    await client.close()

    assert text == "48 hours notice"
    assert captured["url"] == settings.completion_url()
    assert captured["auth"] == "Bearer test-key"
    assert captured["body"]["stream"] is False
    assert captured["body"]["response_format"] == {"type": "json_object"}
    assert captured["body"]["messages"][0] == {
        "role": "system",
        "content": "You are an RTLO expert.",
    }


@pytest.mark.asyncio
async def test_chat_completion_without_json_mode_omits_response_format(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        assert "response_format" not in json.loads(request.content)
        return httpx.Response(200, json={"result": {"response": "ok"}, "success": True})

    client = make_client(settings, handler)
    assert await client.chat_completion(MESSAGES) == "ok"


@pytest.mark.asyncio
async def test_chat_completion_serializes_object_responses(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"result": {"response": {"answer": "yes"}}, "success": True},
        )

    client = make_client(settings, handler)
    assert json.loads(await client.chat_completion(MESSAGES)) == {"answer": "yes"}


@pytest.mark.asyncio
async def test_chat_completion_missing_result_returns_empty(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True})

    client = make_client(settings, handler)
    assert await client.chat_completion(MESSAGES) == ""


@pytest.mark.asyncio
async def test_non_2xx_raises_request_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="rate limited")

    client = make_client(settings, handler)
    with pytest.raises(GatewayRequestError) as exc_info:
        await client.chat_completion(MESSAGES)

    assert exc_info.value.message == "ChittyGateway request failed: 429 - rate limited"
    assert exc_info.value.upstream_status == 429


@pytest.mark.asyncio
async def test_transport_failure_raises_request_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(settings, handler)
    with pytest.raises(GatewayRequestError) as exc_info:
        await client.chat_completion(MESSAGES)

    assert isinstance(exc_info.value.original_error, httpx.ConnectError)


@pytest.mark.asyncio
async def test_unsuccessful_envelope_raises_response_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"success": False, "errors": [{"code": 7000, "message": "bad"}]}
        )

    client = make_client(settings, handler)
    with pytest.raises(GatewayResponseError) as exc_info:
        await client.chat_completion(MESSAGES)

    assert exc_info.value.message.startswith("ChittyGateway error: ")
    assert exc_info.value.errors == [{"code": 7000, "message": "bad"}]


@pytest.mark.asyncio
async def test_non_json_body_raises_response_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    client = make_client(settings, handler)
    with pytest.raises(GatewayResponseError):
        await client.chat_completion(MESSAGES)


@pytest.mark.asyncio
async def test_missing_api_key_raises_configuration_error(settings):
    settings.api_key = None

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = make_client(settings, handler)
    with pytest.raises(GatewayConfigurationError):
        await client.chat_completion(MESSAGES)
