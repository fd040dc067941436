"""ChittyGateway client and RTLO assistant use cases."""

from crtlo.ai.gateway.client import ChittyGatewayClient
from crtlo.ai.gateway.service import RTLOAssistantService

__all__ = ["ChittyGatewayClient", "RTLOAssistantService"]
