"""Amazon Bedrock runtime adapter."""

from .adapter import BedrockProvider, DecodeStrategy, PreparedCall
from .payloads import build_converse_request, shape_request
from .signing import SignedRequest, sign_request

__all__ = [
    "BedrockProvider",
    "DecodeStrategy",
    "PreparedCall",
    "build_converse_request",
    "shape_request",
    "SignedRequest",
    "sign_request",
]
