"""Helpers for creating fake transports and response channels."""

import json
from contextlib import asynccontextmanager
from typing import Iterable, List, Optional

from bedrock_gateway.http.transport import HttpRequest, ResponseChannel, Transport


class FakeChannel(ResponseChannel):
    """In-memory ResponseChannel that counts how often it was closed."""

    def __init__(self, lines: Iterable[str] = (), body: Optional[str] = None,
                 status_code: int = 200, error_after: Optional[int] = None,
                 error: Optional[Exception] = None):
        self.lines = list(lines)
        self.body = body if body is not None else "\n".join(self.lines)
        self.status_code = status_code
        self.error_after = error_after
        self.error = error
        self.close_calls = 0
        self.lines_read = 0

    async def aiter_lines(self):
        for index, line in enumerate(self.lines):
            if self.error_after is not None and index >= self.error_after:
                raise self.error
            self.lines_read += 1
            yield line
        if self.error_after is not None and self.error_after >= len(self.lines):
            raise self.error

    async def aread_text(self) -> str:
        if self.error is not None and self.error_after == 0:
            raise self.error
        return self.body

    async def aclose(self) -> None:
        self.close_calls += 1


class FakeTransport(Transport):
    """Transport returning a prepared FakeChannel and recording requests.

    Leaves closing the channel to the code under test so tests can count
    closes made by the gateway itself.
    """

    def __init__(self, channel: Optional[FakeChannel] = None, error: Optional[Exception] = None):
        self.channel = channel or FakeChannel()
        self.error = error
        self.requests: List[HttpRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    @asynccontextmanager
    async def open(self, request: HttpRequest):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        yield self.channel


def claude_delta_lines(texts: Iterable[str]) -> List[str]:
    """Claude messages stream deltas as data lines, followed by [DONE]."""
    lines = ['data: {"type":"message_start","message":{"role":"assistant"}}', ""]
    for text in texts:
        lines.append(
            'data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":%s}}'
            % json.dumps(text)
        )
        lines.append("")
    lines.append("data: [DONE]")
    return lines
