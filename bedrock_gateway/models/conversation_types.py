from pydantic import BaseModel, ConfigDict
from typing import Iterable, List, Sequence, Tuple, Union
from enum import Enum


class TurnRole(str, Enum):
    """Conversation turn roles."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ConversationMessage(BaseModel):
    """One immutable (role, text) turn of a conversation."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: TurnRole
    content: str


ConversationInput = Sequence[Union[ConversationMessage, Tuple[str, str]]]


def to_messages(conversation: Iterable[Union[ConversationMessage, Tuple[str, str]]]) -> List[ConversationMessage]:
    """Normalize a conversation given as messages or (role, text) pairs."""
    messages = []
    for turn in conversation:
        if isinstance(turn, ConversationMessage):
            messages.append(turn)
        elif isinstance(turn, dict):
            messages.append(ConversationMessage(role=turn.get("role"), content=turn.get("content")))
        else:
            role, content = turn
            messages.append(ConversationMessage(role=role, content=content))
    return messages
