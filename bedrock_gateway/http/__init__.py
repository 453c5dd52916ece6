"""HTTP transport and FastAPI endpoints."""

from .transport import HttpRequest, HttpxTransport, ResponseChannel, Transport

__all__ = ["HttpRequest", "HttpxTransport", "ResponseChannel", "Transport"]
