"""Main client interface for the Bedrock gateway."""

import uuid
from dataclasses import dataclass
from typing import AsyncGenerator, List, Optional

from ..config.settings import GatewaySettings
from ..core.credentials import CredentialStore
from ..http.transport import HttpxTransport, Transport
from ..models.conversation_types import ConversationInput, to_messages
from ..models.events import EndOfStream, ErrorChunk, StreamChunk
from ..models.generation import GenerationParams
from ..observability.logging import GatewayLogger
from ..providers.bedrock.adapter import BedrockProvider
from ..providers.errors import ErrorMapper


logger = GatewayLogger("client")


@dataclass
class GatewayResult:
    """A drained stream: concatenated text and the terminal error, if any."""
    text: str
    error: Optional[ErrorChunk] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BedrockGateway:
    """High-level streaming client for Bedrock chat models.

    Failures never escape ``stream()`` as exceptions: they arrive as a single
    ErrorChunk at the end of the chunk sequence.
    """

    def __init__(
        self,
        credential_store: Optional[CredentialStore] = None,
        transport: Optional[Transport] = None,
        settings: Optional[GatewaySettings] = None,
    ):
        """
        Initialize the gateway.

        Args:
            credential_store: Source of the active credential
            transport: HTTP transport, an httpx-backed one is created if omitted
            settings: Host override and timeouts
        """
        self.settings = settings or GatewaySettings()
        self.credential_store = credential_store or CredentialStore()
        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(
            timeout=self.settings.timeout_seconds,
            connect_timeout=self.settings.connect_timeout_seconds,
        )
        self.provider = BedrockProvider(self.transport, self.settings)

    @classmethod
    def from_env(cls, transport: Optional[Transport] = None) -> "BedrockGateway":
        """Build a gateway whose credential comes from the environment."""
        settings = GatewaySettings.from_env()
        return cls(CredentialStore.from_settings(settings), transport=transport, settings=settings)

    async def stream(
        self,
        conversation: ConversationInput,
        model_id: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
        stop_sequences: Optional[List[str]] = None,
        include_end: bool = False,
        request_id: Optional[str] = None,
    ) -> AsyncGenerator[StreamChunk, None]:
        """Stream a chat completion.

        Args:
            conversation: Turns as ConversationMessage objects or (role, text) pairs
            model_id: Bedrock model identifier
            system_prompt: Optional system prompt
            temperature: Optional sampling temperature
            max_tokens: Optional output limit
            top_p: Optional nucleus sampling value
            stop_sequences: Optional stop sequences
            include_end: Emit an EndOfStream chunk after a clean close
            request_id: Optional correlation id for logs

        Yields:
            StreamChunk: zero or more ContentDelta, then at most one
            ErrorChunk (or EndOfStream when ``include_end`` is set)
        """
        request_id = request_id or str(uuid.uuid4())[:8]

        # One snapshot per call; later store mutations do not affect it
        credential = self.credential_store.get_active()
        auth_error = ErrorMapper.check_credential(credential)
        if auth_error is not None:
            logger.warning("Rejected call without usable credentials", model=model_id, request_id=request_id)
            yield auth_error
            return

        terminated = False
        upstream = None
        try:
            params = GenerationParams(
                temperature=temperature,
                top_p=top_p,
                max_tokens=max_tokens,
                stop_sequences=stop_sequences,
                system_prompt=system_prompt,
            )
            messages = to_messages(conversation)

            with logger.track_request("stream", model_id, request_id=request_id):
                upstream = self.provider.stream(credential, model_id, messages, params, request_id=request_id)
                async for chunk in upstream:
                    if chunk.is_terminal:
                        terminated = True
                        yield chunk
                        break
                    yield chunk
        except Exception as e:
            if not terminated:
                terminated = True
                yield ErrorMapper.map_exception(e)
        finally:
            if upstream is not None:
                await upstream.aclose()

        if include_end and not terminated:
            yield EndOfStream()

    async def complete(self, conversation: ConversationInput, model_id: str, **kwargs) -> GatewayResult:
        """Drain ``stream()`` into a GatewayResult."""
        parts = []
        error = None
        stream = self.stream(conversation, model_id, **kwargs)
        try:
            async for chunk in stream:
                if isinstance(chunk, ErrorChunk):
                    error = chunk
                elif not isinstance(chunk, EndOfStream):
                    parts.append(chunk.text)
        finally:
            await stream.aclose()
        return GatewayResult(text="".join(parts), error=error)

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "BedrockGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
