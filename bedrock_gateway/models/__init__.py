"""Data models for the gateway."""

from .conversation_types import ConversationMessage, TurnRole, to_messages
from .credentials import (
    AuthMethod,
    BearerCredential,
    Credential,
    SigningCredential,
    credential_to_dict,
    parse_credential,
)
from .events import ContentDelta, EndOfStream, ErrorChunk, ErrorKind, StreamChunk
from .generation import GenerationParams

__all__ = [
    # Conversation models
    "ConversationMessage",
    "TurnRole",
    "to_messages",

    # Credentials
    "AuthMethod",
    "BearerCredential",
    "Credential",
    "SigningCredential",
    "credential_to_dict",
    "parse_credential",

    # Stream chunks
    "ContentDelta",
    "EndOfStream",
    "ErrorChunk",
    "ErrorKind",
    "StreamChunk",

    # Generation
    "GenerationParams",
]
