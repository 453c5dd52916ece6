from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class GenerationParams(BaseModel):
    """
    Optional generation parameters for one gateway call.

    Every field is nullable. A missing value means "let the backend default
    apply": the request shaper omits it from the payload, except for
    max_tokens which falls back to DEFAULT_MAX_TOKENS on the invoke families.
    """

    model_config = ConfigDict(frozen=True)

    temperature: Optional[float] = Field(None, ge=0.0, le=2.0, description="Sampling temperature")
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0, description="Nucleus sampling parameter")
    max_tokens: Optional[int] = Field(None, ge=1, description="Maximum tokens to generate")
    stop_sequences: Optional[List[str]] = Field(None, description="Stop sequences")
    system_prompt: Optional[str] = Field(None, description="System prompt sent alongside the turns")
