"""
Base Provider Adapter Interface

This module defines the abstract base class for streaming provider adapters
and the internal exception type they raise. Adapters raise ProviderError;
only the gateway facade turns failures into error chunks.
"""

from abc import ABC, abstractmethod
from typing import AsyncGenerator, List, Optional, Union

from ..models.conversation_types import ConversationMessage
from ..models.credentials import BearerCredential, SigningCredential
from ..models.events import ErrorKind, StreamChunk
from ..models.generation import GenerationParams


class ProviderAdapter(ABC):
    """
    Abstract base class for streaming provider adapters.

    The adapter is responsible for:
    - Shaping the vendor request for the requested model
    - Authenticating it with the supplied credential snapshot
    - Issuing the call through the transport
    - Decoding the response into normalized stream chunks

    Adapters should NOT:
    - Read credentials from shared state (the caller passes a snapshot)
    - Retry failed calls
    - Swallow transport exceptions (the facade normalizes them)
    """

    @abstractmethod
    def stream(
        self,
        credential: Union[SigningCredential, BearerCredential],
        model_id: str,
        messages: List[ConversationMessage],
        params: GenerationParams,
    ) -> AsyncGenerator[StreamChunk, None]:
        """
        Stream a chat completion as normalized chunks.

        Args:
            credential: Immutable credential snapshot for this call
            model_id: Backend model identifier
            messages: Conversation turns
            params: Generation parameters

        Yields:
            StreamChunk: content deltas, possibly followed by one error chunk

        Raises:
            ProviderError: For HTTP-level vendor failures
        """
        pass

    def get_provider_name(self) -> str:
        """
        Get the name of this provider.

        By default, returns the class name without 'Provider' suffix.
        """
        class_name = self.__class__.__name__
        if class_name.endswith("Provider"):
            return class_name[:-8].lower()
        return class_name.lower()


class ProviderError(Exception):
    """
    Internal exception for provider failures.

    Attributes:
        message: Error message
        kind: Normalized error kind the failure maps to
        provider: Provider name
        status_code: HTTP status code if applicable
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.API_ERROR,
        provider: str = "bedrock",
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.provider = provider
        self.status_code = status_code
