"""
Vendor request payload models.

Each Bedrock model family expects its own JSON body. The shapes share almost
no fields, so every family gets its own model and the set is exposed as a
discriminated union on the ``family`` tag. ``to_payload()`` renders the wire
JSON: aliases applied, unset optional fields dropped, the tag excluded.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _VendorPayload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"family"})


class VendorMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str


class TextGenerationConfig(BaseModel):
    """Sampling block shared by the flattened-prompt families."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    max_token_count: Optional[int] = Field(None, alias="maxTokenCount")
    stop_sequences: Optional[List[str]] = Field(None, alias="stopSequences")
    temperature: Optional[float] = None
    top_p: Optional[float] = Field(None, alias="topP")


class _MessagesRequest(_VendorPayload):
    messages: List[VendorMessage]
    max_tokens: int
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stop_sequences: Optional[List[str]] = None
    system: Optional[str] = None


class AnthropicMessagesRequest(_MessagesRequest):
    family: Literal["anthropic"] = "anthropic"
    anthropic_version: str


class GenericMessagesRequest(_MessagesRequest):
    family: Literal["generic"] = "generic"


class _TextPromptRequest(_VendorPayload):
    input_text: str = Field(..., alias="inputText")
    text_generation_config: TextGenerationConfig = Field(..., alias="textGenerationConfig")


class TitanTextRequest(_TextPromptRequest):
    family: Literal["titan"] = "titan"


class AI21TextRequest(_TextPromptRequest):
    family: Literal["ai21"] = "ai21"


class CohereTextRequest(_TextPromptRequest):
    family: Literal["cohere"] = "cohere"


class LlamaTextRequest(_TextPromptRequest):
    family: Literal["llama"] = "llama"


VendorRequest = Annotated[
    Union[
        AnthropicMessagesRequest,
        TitanTextRequest,
        AI21TextRequest,
        CohereTextRequest,
        LlamaTextRequest,
        GenericMessagesRequest,
    ],
    Field(discriminator="family"),
]


# Converse API (bearer path)

class ConverseText(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class ConverseMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: List[ConverseText]


class ConverseInferenceConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    max_tokens: Optional[int] = Field(None, alias="maxTokens")
    temperature: Optional[float] = None
    top_p: Optional[float] = Field(None, alias="topP")
    stop_sequences: Optional[List[str]] = Field(None, alias="stopSequences")


class ConverseRequest(_VendorPayload):
    family: Literal["converse"] = "converse"
    messages: List[ConverseMessage]
    system: Optional[List[ConverseText]] = None
    inference_config: Optional[ConverseInferenceConfig] = Field(None, alias="inferenceConfig")
