import json
import time
from enum import Enum
from typing import AsyncGenerator, List, Optional, Union
from urllib.parse import quote

from ..base import ProviderAdapter
from ..errors import ErrorMapper
from ...config.constants import (
    ACCEPT_EVENT_STREAM,
    CONTENT_TYPE_JSON,
    CONVERSE_PATH_TEMPLATE,
    INVOKE_STREAM_PATH_TEMPLATE,
    RUNTIME_HOST_TEMPLATE,
    SERVICE_NAME,
)
from ...config.settings import GatewaySettings
from ...http.transport import HttpRequest, ResponseChannel, Transport
from ...models.conversation_types import ConversationMessage
from ...models.credentials import BearerCredential, SigningCredential
from ...models.events import ContentDelta, StreamChunk
from ...models.generation import GenerationParams
from ...observability.logging import GatewayLogger
from .payloads import build_converse_request, shape_request
from .signing import sign_request
from .streaming import stream_converse_document, stream_line_events


logger = GatewayLogger("providers.bedrock")


class DecodeStrategy(str, Enum):
    """How a response body is turned into chunks."""
    LINE_EVENTS = "line_events"
    SINGLE_DOCUMENT = "single_document"


class PreparedCall:
    """An authenticated request together with the way to decode its response."""

    def __init__(self, request: HttpRequest, strategy: DecodeStrategy):
        self.request = request
        self.strategy = strategy


class BedrockProvider(ProviderAdapter):
    """Bedrock runtime adapter supporting signed and bearer-token calls."""

    def __init__(self, transport: Transport, settings: Optional[GatewaySettings] = None):
        self.transport = transport
        self.settings = settings or GatewaySettings()

    def _host(self, region: str) -> str:
        if self.settings.endpoint_host:
            return self.settings.endpoint_host
        return RUNTIME_HOST_TEMPLATE.format(region=region)

    def _scheme(self) -> str:
        if self.settings.endpoint_host:
            return self.settings.endpoint_scheme
        return "https"

    @staticmethod
    def _model_segment(model_id: str) -> str:
        return quote(model_id, safe="")

    def prepare(
        self,
        credential: Union[SigningCredential, BearerCredential],
        model_id: str,
        messages: List[ConversationMessage],
        params: GenerationParams,
    ) -> PreparedCall:
        """
        Build the authenticated request for one call.

        The credential variant decides the payload shape, the endpoint, the
        authentication scheme and the decode strategy together.
        """
        if not isinstance(credential, (SigningCredential, BearerCredential)):
            raise TypeError(f"Unsupported credential type: {type(credential).__name__}")

        host = self._host(credential.region)
        scheme = self._scheme()

        if isinstance(credential, SigningCredential):
            path = INVOKE_STREAM_PATH_TEMPLATE.format(model=self._model_segment(model_id))
            body = json.dumps(shape_request(model_id, messages, params).to_payload()).encode("utf-8")
            signed = sign_request(
                method="POST",
                path=path,
                headers={
                    "Content-Type": CONTENT_TYPE_JSON,
                    "Accept": ACCEPT_EVENT_STREAM,
                },
                payload=body,
                credential=credential,
                service=SERVICE_NAME,
                host=host,
            )
            request = HttpRequest("POST", f"{scheme}://{host}{path}", signed.headers, body)
            return PreparedCall(request, DecodeStrategy.LINE_EVENTS)

        path = CONVERSE_PATH_TEMPLATE.format(model=self._model_segment(model_id))
        body = json.dumps(build_converse_request(messages, params).to_payload()).encode("utf-8")
        headers = {
            "Authorization": f"Bearer {credential.api_key}",
            "Content-Type": CONTENT_TYPE_JSON,
        }
        request = HttpRequest("POST", f"{scheme}://{host}{path}", headers, body)
        return PreparedCall(request, DecodeStrategy.SINGLE_DOCUMENT)

    async def stream(
        self,
        credential: Union[SigningCredential, BearerCredential],
        model_id: str,
        messages: List[ConversationMessage],
        params: GenerationParams,
        request_id: Optional[str] = None,
    ) -> AsyncGenerator[StreamChunk, None]:
        """Stream a chat completion from Bedrock as normalized chunks."""
        call = self.prepare(credential, model_id, messages, params)
        logger.debug(
            "Dispatching request",
            model=model_id,
            request_id=request_id,
            strategy=call.strategy.value,
        )

        start_time = time.time()
        chunks = 0
        total_chars = 0
        outcome = "cancelled"

        async with self.transport.open(call.request) as channel:
            if channel.status_code >= 400:
                body = await channel.aread_text()
                await channel.aclose()
                raise ErrorMapper.status_error(channel.status_code, body)

            decoder = self._decoder(call.strategy, channel, model_id, request_id)
            try:
                async for chunk in decoder:
                    if isinstance(chunk, ContentDelta):
                        chunks += 1
                        total_chars += len(chunk.text)
                    else:
                        outcome = chunk.type
                    yield chunk
                if outcome == "cancelled":
                    outcome = "complete"
            finally:
                await decoder.aclose()
                logger.log_streaming_metrics(
                    chunks=chunks,
                    total_chars=total_chars,
                    duration=time.time() - start_time,
                    model=model_id,
                    request_id=request_id,
                    outcome=outcome,
                )

    @staticmethod
    def _decoder(
        strategy: DecodeStrategy,
        channel: ResponseChannel,
        model_id: str,
        request_id: Optional[str],
    ) -> AsyncGenerator[StreamChunk, None]:
        if strategy is DecodeStrategy.LINE_EVENTS:
            return stream_line_events(channel, model=model_id, request_id=request_id)
        return stream_converse_document(channel)
