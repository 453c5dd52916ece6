"""Public client API."""

from .client import BedrockGateway, GatewayResult

__all__ = ["BedrockGateway", "GatewayResult"]
