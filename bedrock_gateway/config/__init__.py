"""Gateway configuration constants and model families.

Runtime settings live in ``bedrock_gateway.config.settings``.
"""

from .constants import DEFAULT_MAX_TOKENS, DEFAULT_REGION
from .model_families import MODEL_FAMILY_PREFIXES, ModelFamily, detect_family

__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_REGION",
    "MODEL_FAMILY_PREFIXES",
    "ModelFamily",
    "detect_family",
]
