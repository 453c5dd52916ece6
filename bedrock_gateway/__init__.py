"""
Bedrock Gateway - streaming chat completions over Amazon Bedrock.

This package normalizes "send a conversation, receive a token stream" across
Bedrock model families:
- Anthropic Claude, Amazon Titan, AI21, Cohere and Meta Llama request shapes
- Signature Version 4 signing or bearer API keys
- Line-event streams and single-document Converse responses

Every call yields normalized chunks; failures arrive as one error chunk
instead of an exception.
"""

__version__ = "0.1.0"

from .api.client import BedrockGateway, GatewayResult
from .config.settings import GatewaySettings
from .core.credentials import CredentialStore
from .models.conversation_types import ConversationMessage, TurnRole
from .models.credentials import AuthMethod, BearerCredential, SigningCredential
from .models.events import ContentDelta, EndOfStream, ErrorChunk, ErrorKind, StreamChunk
from .models.generation import GenerationParams

__all__ = [
    # Main client
    "BedrockGateway",
    "GatewayResult",

    # Configuration
    "GatewaySettings",
    "CredentialStore",

    # Models
    "AuthMethod",
    "BearerCredential",
    "SigningCredential",
    "ConversationMessage",
    "TurnRole",
    "GenerationParams",

    # Stream chunks
    "ContentDelta",
    "EndOfStream",
    "ErrorChunk",
    "ErrorKind",
    "StreamChunk",
]
