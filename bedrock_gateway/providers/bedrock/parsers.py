from __future__ import annotations

import base64
import binascii
import json
from typing import Any, List, Optional

from ...models.events import ContentDelta, StreamChunk
from ..errors import ErrorMapper


class MalformedDocumentError(ValueError):
    """A single-document body was not an object or had a wrongly-typed known key."""


def _first_text(items: Any) -> Optional[str]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        text = items[0].get("text")
        if isinstance(text, str):
            return text
    return None


def _decode_bytes_envelope(encoded: Any) -> Optional[dict]:
    """Unwrap ``{"bytes": "<base64 json>"}`` payload envelopes."""
    if not isinstance(encoded, str):
        return None
    try:
        decoded = json.loads(base64.b64decode(encoded, validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
    return decoded if isinstance(decoded, dict) else None


def extract_stream_text(event: dict) -> Optional[str]:
    """Extract the text fragment carried by one decoded stream event.

    Recognizes the per-family streaming shapes: Claude messages deltas and
    content blocks, Claude text completions, Titan ``outputText``, Llama
    ``generation``, ``outputs``/``generations`` lists, Cohere ``text`` and
    converse-stream ``contentBlockDelta``.
    """
    if "bytes" in event:
        inner = _decode_bytes_envelope(event["bytes"])
        return extract_stream_text(inner) if inner is not None else None

    delta = event.get("delta")
    if isinstance(delta, dict) and isinstance(delta.get("text"), str):
        return delta["text"]

    block = event.get("content_block")
    if isinstance(block, dict) and isinstance(block.get("text"), str):
        return block["text"]

    block_delta = event.get("contentBlockDelta")
    if isinstance(block_delta, dict):
        inner_delta = block_delta.get("delta")
        if isinstance(inner_delta, dict) and isinstance(inner_delta.get("text"), str):
            return inner_delta["text"]

    for key in ("completion", "outputText", "generation", "text"):
        value = event.get(key)
        if isinstance(value, str):
            return value

    for key in ("outputs", "generations"):
        text = _first_text(event.get(key))
        if text is not None:
            return text

    return None


def chunk_from_stream_event(event: Any) -> Optional[StreamChunk]:
    """Convert one decoded ``data:`` payload into a chunk, or None to skip it."""
    if not isinstance(event, dict):
        return None

    if "bytes" in event:
        inner = _decode_bytes_envelope(event["bytes"])
        return chunk_from_stream_event(inner) if inner is not None else None

    if isinstance(event.get("error"), dict):
        return ErrorMapper.vendor_error(event["error"])
    if event.get("type") == "error":
        return ErrorMapper.vendor_error(event.get("error") or event)

    text = extract_stream_text(event)
    if text:
        return ContentDelta(text)
    return None


def _converse_text(output: Any) -> Optional[str]:
    """Walk output.message.content[0].text, rejecting wrongly-typed nodes."""
    if not isinstance(output, dict):
        raise MalformedDocumentError("'output' is not an object")
    message = output.get("message")
    if message is None:
        return None
    if not isinstance(message, dict):
        raise MalformedDocumentError("'output.message' is not an object")
    content = message.get("content")
    if content is None:
        return None
    if not isinstance(content, list):
        raise MalformedDocumentError("'output.message.content' is not an array")
    if not content:
        return None
    first = content[0]
    if not isinstance(first, dict):
        raise MalformedDocumentError("'output.message.content[0]' is not an object")
    text = first.get("text")
    if text is not None and not isinstance(text, str):
        raise MalformedDocumentError("'output.message.content[0].text' is not a string")
    return text


def parse_converse_document(body: str) -> List[StreamChunk]:
    """Decode a complete Converse API response body.

    Returns one content delta for a non-blank success text, one api_error for
    an ``error`` object, both in that order if both are present, and nothing
    for an object matching neither shape. Invalid JSON, a non-object
    document or a known key with the wrong structure ends the list with a
    parse_error; content found before the failure is kept.
    """
    chunks: List[StreamChunk] = []
    try:
        document = json.loads(body)
        if not isinstance(document, dict):
            raise MalformedDocumentError("response is not a JSON object")

        if "output" in document:
            text = _converse_text(document["output"])
            if text and text.strip():
                chunks.append(ContentDelta(text))

        if "error" in document:
            error = document["error"]
            if error is not None and not isinstance(error, dict):
                raise MalformedDocumentError("'error' is not an object")
            chunks.append(ErrorMapper.vendor_error(error or {}))
    except (ValueError, RecursionError) as e:
        chunks.append(ErrorMapper.parse_failure(e))
    return chunks
