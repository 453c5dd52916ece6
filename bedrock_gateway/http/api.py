"""FastAPI HTTP endpoints for the Bedrock gateway.

``POST /stream`` relays gateway chunks as Server-Sent Events: one
``data: <chunk json>`` frame per chunk, then ``data: [DONE]``. Errors are
frames too, so the response status is always 200 once streaming starts.
"""

import json
from typing import List, Optional

try:
    from fastapi import APIRouter, Depends
    from fastapi.responses import StreamingResponse
except ImportError:
    raise ImportError(
        "FastAPI is required for HTTP endpoints. "
        "Please install with: pip install bedrock-gateway"
    )
from pydantic import BaseModel, Field

from ..api.client import BedrockGateway
from ..config.constants import DONE_SENTINEL
from ..config.model_families import detect_family
from ..models.conversation_types import ConversationMessage


router = APIRouter()

_gateway: Optional[BedrockGateway] = None


def get_gateway() -> BedrockGateway:
    """Dependency returning the process-wide gateway, built from the environment."""
    global _gateway
    if _gateway is None:
        _gateway = BedrockGateway.from_env()
    return _gateway


class StreamRequest(BaseModel):
    """Body of ``POST /stream``."""
    model: str
    messages: List[ConversationMessage]
    system_prompt: Optional[str] = None
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, ge=1)
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)
    stop_sequences: Optional[List[str]] = None


@router.post("/stream")
async def stream_chat(request: StreamRequest, gateway: BedrockGateway = Depends(get_gateway)):
    """Stream a chat completion as Server-Sent Events."""

    async def event_stream():
        stream = gateway.stream(
            request.messages,
            request.model,
            system_prompt=request.system_prompt,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            top_p=request.top_p,
            stop_sequences=request.stop_sequences,
        )
        try:
            async for chunk in stream:
                yield f"data: {json.dumps(chunk.to_dict())}\n\n"
        finally:
            await stream.aclose()
        yield f"data: {DONE_SENTINEL}\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/status")
async def gateway_status(gateway: BedrockGateway = Depends(get_gateway)):
    """Report which credential variant is configured, without secrets."""
    credential = gateway.credential_store.get_active()
    if credential is None:
        return {"configured": False, "auth_method": None, "region": None}
    return {
        "configured": credential.is_complete(),
        "auth_method": credential.auth_method,
        "region": credential.region,
    }


@router.get("/model-family")
async def model_family(model: str):
    """Report which request family a model identifier dispatches to."""
    return {"model": model, "family": detect_family(model).value}
