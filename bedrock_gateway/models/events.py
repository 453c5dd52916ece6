"""Normalized stream chunks emitted by the gateway.

Every gateway call produces a sequence of these: zero or more ContentDelta
chunks, then at most one terminal chunk (ErrorChunk, or EndOfStream when the
caller asked for an explicit close marker).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union


class ErrorKind(str, Enum):
    """Closed error taxonomy surfaced to callers."""
    AUTH_ERROR = "auth_error"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    API_ERROR = "api_error"


@dataclass(frozen=True)
class ContentDelta:
    """A text fragment of the model's answer."""
    text: str
    type: str = field(default="content", init=False)

    @property
    def is_terminal(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ErrorChunk:
    """A normalized failure. Always the last chunk of a stream."""
    kind: ErrorKind
    message: str
    type: str = field(default="error", init=False)

    @property
    def is_terminal(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        kind = self.kind.value if isinstance(self.kind, ErrorKind) else str(self.kind)
        return {"type": self.type, "kind": kind, "message": self.message}


@dataclass(frozen=True)
class EndOfStream:
    """Clean close marker."""
    type: str = field(default="end", init=False)

    @property
    def is_terminal(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type}


StreamChunk = Union[ContentDelta, ErrorChunk, EndOfStream]
