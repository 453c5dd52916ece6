from __future__ import annotations

import json
from typing import AsyncGenerator, Optional

from ...config.constants import DATA_PREFIX, DONE_SENTINEL, EVENT_PREFIX, TERMINAL_EVENTS
from ...http.transport import ResponseChannel
from ...models.events import StreamChunk
from ...observability.logging import GatewayLogger
from .parsers import chunk_from_stream_event, parse_converse_document

logger = GatewayLogger("streaming")


async def stream_line_events(
    channel: ResponseChannel,
    model: Optional[str] = None,
    request_id: Optional[str] = None,
) -> AsyncGenerator[StreamChunk, None]:
    """Decode a line-oriented event stream into chunks.

    ``data:`` lines carry JSON payloads and ``[DONE]`` ends the stream;
    ``event:`` lines named ``completion`` or ``done`` also end it. A payload
    that is not valid JSON is dropped and reading continues, so one bad line
    never costs the rest of the answer. A vendor error payload is emitted as
    the final chunk. The channel is closed on every exit path.
    """
    skipped = 0
    try:
        async for raw_line in channel.aiter_lines():
            line = raw_line.strip()
            if not line:
                continue

            if line.startswith(DATA_PREFIX):
                data = line[len(DATA_PREFIX):].strip()
                if data == DONE_SENTINEL:
                    break
                try:
                    event = json.loads(data)
                except (ValueError, RecursionError):
                    skipped += 1
                    logger.debug("Skipping unparseable stream line", model=model, request_id=request_id)
                    continue

                chunk = chunk_from_stream_event(event)
                if chunk is None:
                    continue
                yield chunk
                if chunk.is_terminal:
                    return

            elif line.startswith(EVENT_PREFIX):
                event_name = line[len(EVENT_PREFIX):].strip()
                if event_name in TERMINAL_EVENTS:
                    break
    finally:
        if skipped:
            logger.debug("Stream lines dropped", model=model, request_id=request_id, skipped=skipped)
        await channel.aclose()


async def stream_converse_document(channel: ResponseChannel) -> AsyncGenerator[StreamChunk, None]:
    """Read a Converse API body once and emit its chunks as one batch.

    A document matching neither the success nor the error shape yields an
    empty stream.
    """
    try:
        body = await channel.aread_text()
        for chunk in parse_converse_document(body):
            yield chunk
    finally:
        await channel.aclose()
