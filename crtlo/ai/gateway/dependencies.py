"""
FastAPI dependencies for the AI gateway.

The HTTP client is shared across requests and closed on shutdown.
"""

from fastapi import Depends

from crtlo.ai.gateway.client import ChittyGatewayClient
from crtlo.ai.gateway.config import get_gateway_settings
from crtlo.ai.gateway.service import RTLOAssistantService

_gateway_client: ChittyGatewayClient | None = None


def get_gateway_client() -> ChittyGatewayClient:
    global _gateway_client
    if _gateway_client is None:
        _gateway_client = ChittyGatewayClient(settings=get_gateway_settings())
    return _gateway_client


async def close_gateway_client() -> None:
    global _gateway_client
    if _gateway_client is not None:
        await _gateway_client.close()
        _gateway_client = None


def get_rtlo_assistant_service(
    client: ChittyGatewayClient = Depends(get_gateway_client),
) -> RTLOAssistantService:
    """
    FastAPI dependency for getting the RTLO assistant service.

    Args:
        client: The shared gateway client

    Returns:
        RTLOAssistantService: Service wrapping the client
    """
    return RTLOAssistantService(client)
