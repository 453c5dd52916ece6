"""
Provider Adapters Layer

Provider adapters translate the gateway's normalized call into a backend's
request format, authentication scheme and response encoding.
"""

from .base import ProviderAdapter, ProviderError
from .errors import ErrorMapper
from .bedrock.adapter import BedrockProvider

__all__ = [
    "ProviderAdapter",
    "ProviderError",
    "ErrorMapper",
    "BedrockProvider",
]
