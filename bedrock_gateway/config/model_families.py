# Model family prefixes for Bedrock model identifiers
from enum import Enum
from typing import Optional, Tuple


class ModelFamily(str, Enum):
    """Request/response wire families keyed on the model identifier."""
    ANTHROPIC = "anthropic"
    TITAN = "titan"
    AI21 = "ai21"
    COHERE = "cohere"
    LLAMA = "llama"
    GENERIC = "generic"


# Evaluated in order, first match wins
MODEL_FAMILY_PREFIXES: Tuple[Tuple[str, ModelFamily], ...] = (
    ("anthropic.claude", ModelFamily.ANTHROPIC),
    ("amazon.titan", ModelFamily.TITAN),
    ("ai21.", ModelFamily.AI21),
    ("cohere.", ModelFamily.COHERE),
    ("meta.llama", ModelFamily.LLAMA),
)


def prefix_for(family: ModelFamily) -> Optional[str]:
    """Return the model-id prefix that selects a family, None for the fallback."""
    for prefix, candidate in MODEL_FAMILY_PREFIXES:
        if candidate is family:
            return prefix
    return None


def detect_family(model_id: str) -> ModelFamily:
    """Resolve a model identifier to its family by exact prefix match."""
    for prefix, family in MODEL_FAMILY_PREFIXES:
        if model_id.startswith(prefix):
            return family
    return ModelFamily.GENERIC
