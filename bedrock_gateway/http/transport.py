"""
HTTP transport boundary.

The gateway never talks to httpx directly outside this module. A transport
opens a ResponseChannel for a prepared HttpRequest as an async context
manager; the channel is released on every exit path, and closing it more than
once is a no-op.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, Optional

import httpx

from ..observability.logging import GatewayLogger

logger = GatewayLogger("transport")


@dataclass(frozen=True)
class HttpRequest:
    """A fully prepared outbound request."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class ResponseChannel(ABC):
    """Read side of one HTTP response."""

    status_code: int = 200

    @abstractmethod
    def aiter_lines(self) -> AsyncIterator[str]:
        """Iterate decoded body lines as they arrive."""

    @abstractmethod
    async def aread_text(self) -> str:
        """Read the whole remaining body as text."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release the connection. Idempotent."""


class Transport(ABC):
    """Issues HTTP requests for the gateway."""

    @abstractmethod
    def open(self, request: HttpRequest):
        """Return an async context manager yielding a ResponseChannel."""

    async def aclose(self) -> None:
        """Release transport-wide resources."""


class HttpxChannel(ResponseChannel):
    """ResponseChannel over a streaming httpx.Response."""

    def __init__(self, response: httpx.Response):
        self._response = response
        self._closed = False
        self.status_code = response.status_code

    def aiter_lines(self) -> AsyncIterator[str]:
        return self._response.aiter_lines()

    async def aread_text(self) -> str:
        await self._response.aread()
        return self._response.text

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._response.aclose()


class HttpxTransport(Transport):
    """Transport backed by an httpx.AsyncClient.

    Timeouts are enforced by httpx and surface as httpx.TimeoutException,
    which the gateway reports as a network_error.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 120.0,
        connect_timeout: float = 10.0,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=connect_timeout)
        )

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    @asynccontextmanager
    async def open(self, request: HttpRequest) -> AsyncIterator[ResponseChannel]:
        outbound = self._client.build_request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body,
        )
        response = await self._client.send(outbound, stream=True)
        logger.debug("Response received", url=request.url, status=response.status_code)
        channel = HttpxChannel(response)
        try:
            yield channel
        finally:
            await channel.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
