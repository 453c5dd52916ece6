from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from ...config.constants import ANTHROPIC_BEDROCK_VERSION, DEFAULT_MAX_TOKENS
from ...config.model_families import ModelFamily, prefix_for
from ...models.conversation_types import ConversationMessage
from ...models.generation import GenerationParams
from ...models.requests import (
    AI21TextRequest,
    AnthropicMessagesRequest,
    CohereTextRequest,
    ConverseInferenceConfig,
    ConverseMessage,
    ConverseRequest,
    ConverseText,
    GenericMessagesRequest,
    LlamaTextRequest,
    TextGenerationConfig,
    TitanTextRequest,
    VendorMessage,
    VendorRequest,
)

Builder = Callable[[List[ConversationMessage], GenerationParams], VendorRequest]

LLAMA_BOS = "<s>"
LLAMA_INST_OPEN = "[INST]"
LLAMA_INST_CLOSE = "[/INST]"
LLAMA_SYS_OPEN = "<<SYS>>"
LLAMA_SYS_CLOSE = "<</SYS>>"
LLAMA_EOS = "</s>"


def _max_tokens(params: GenerationParams) -> int:
    return params.max_tokens if params.max_tokens is not None else DEFAULT_MAX_TOKENS


def _has_system(params: GenerationParams) -> bool:
    return bool(params.system_prompt)


def _vendor_messages(messages: Sequence[ConversationMessage]) -> List[VendorMessage]:
    return [VendorMessage(role=m.role, content=m.content) for m in messages]


def _text_config(params: GenerationParams) -> TextGenerationConfig:
    return TextGenerationConfig(
        max_token_count=_max_tokens(params),
        stop_sequences=params.stop_sequences,
        temperature=params.temperature,
        top_p=params.top_p,
    )


def _capitalize(role: str) -> str:
    return role[:1].upper() + role[1:]


def build_anthropic_request(messages: List[ConversationMessage], params: GenerationParams) -> AnthropicMessagesRequest:
    """Claude messages body with the system prompt in its own field."""
    return AnthropicMessagesRequest(
        messages=_vendor_messages(messages),
        max_tokens=_max_tokens(params),
        temperature=params.temperature,
        top_p=params.top_p,
        stop_sequences=params.stop_sequences,
        system=params.system_prompt,
        anthropic_version=ANTHROPIC_BEDROCK_VERSION,
    )


def build_titan_request(messages: List[ConversationMessage], params: GenerationParams) -> TitanTextRequest:
    """Titan flattened prompt: labelled turns and a trailing assistant cue."""
    labels = {"user": "User", "assistant": "Assistant"}
    parts = []
    if _has_system(params):
        parts.append(f"System: {params.system_prompt}\n\n")
    for message in messages:
        label = labels.get(message.role, _capitalize(message.role))
        parts.append(f"{label}: {message.content}\n\n")
    parts.append("Assistant:")
    return TitanTextRequest(input_text="".join(parts), text_generation_config=_text_config(params))


def build_ai21_request(messages: List[ConversationMessage], params: GenerationParams) -> AI21TextRequest:
    """AI21 flattened prompt: unlabelled system text, Human/Assistant turns."""
    labels = {"user": "Human", "assistant": "Assistant"}
    parts = []
    if _has_system(params):
        parts.append(f"{params.system_prompt}\n\n")
    for message in messages:
        label = labels.get(message.role, _capitalize(message.role))
        parts.append(f"{label}: {message.content}\n\n")
    parts.append("Assistant:")
    return AI21TextRequest(input_text="".join(parts), text_generation_config=_text_config(params))


def build_cohere_request(messages: List[ConversationMessage], params: GenerationParams) -> CohereTextRequest:
    """Cohere flattened prompt: turn text only, no role labels."""
    parts = []
    if _has_system(params):
        parts.append(f"{params.system_prompt}\n\n")
    for message in messages:
        parts.append(f"{message.content}\n")
    return CohereTextRequest(input_text="".join(parts), text_generation_config=_text_config(params))


def build_llama_prompt(messages: Sequence[ConversationMessage], system_prompt: Optional[str]) -> str:
    """Render turns with the Llama 2 chat instruction template.

    The header always opens one ``<s>[INST]`` block, with the system block
    inside it when a system prompt is set. The first turn, if it is a user
    turn, is written into that already-open block instead of opening another.
    When the last turn is from the user the prompt stops after ``[/INST]`` so
    the model continues as the assistant; otherwise a fresh ``<s>[INST] `` is
    appended.
    """
    opening = f"{LLAMA_BOS}{LLAMA_INST_OPEN} "
    if system_prompt:
        prompt = f"{opening}{LLAMA_SYS_OPEN}\n{system_prompt}\n{LLAMA_SYS_CLOSE}\n\n"
    else:
        prompt = opening
    header_open = True

    for message in messages:
        if message.role == "user":
            if header_open:
                prompt += f"{message.content} {LLAMA_INST_CLOSE}"
            else:
                prompt += f"{opening}{message.content} {LLAMA_INST_CLOSE}"
        elif message.role == "assistant":
            prompt += f" {message.content} {LLAMA_EOS}"
        else:
            continue
        header_open = False

    if messages and messages[-1].role == "user":
        return prompt
    if not header_open:
        prompt += opening
    return prompt


def build_llama_request(messages: List[ConversationMessage], params: GenerationParams) -> LlamaTextRequest:
    """Llama instruction-template prompt."""
    return LlamaTextRequest(
        input_text=build_llama_prompt(messages, params.system_prompt),
        text_generation_config=_text_config(params),
    )


def build_generic_request(messages: List[ConversationMessage], params: GenerationParams) -> GenericMessagesRequest:
    """Fallback messages body for unrecognized model identifiers."""
    return GenericMessagesRequest(
        messages=_vendor_messages(messages),
        max_tokens=_max_tokens(params),
        temperature=params.temperature,
        top_p=params.top_p,
        stop_sequences=params.stop_sequences,
        system=params.system_prompt,
    )


def _prefix(family: ModelFamily) -> Callable[[str], bool]:
    prefix = prefix_for(family)
    return lambda model_id: model_id.startswith(prefix)


# Evaluated in order, first match wins
REQUEST_BUILDERS: Tuple[Tuple[Callable[[str], bool], Builder], ...] = (
    (_prefix(ModelFamily.ANTHROPIC), build_anthropic_request),
    (_prefix(ModelFamily.TITAN), build_titan_request),
    (_prefix(ModelFamily.AI21), build_ai21_request),
    (_prefix(ModelFamily.COHERE), build_cohere_request),
    (_prefix(ModelFamily.LLAMA), build_llama_request),
)


def shape_request(
    model_id: str,
    messages: List[ConversationMessage],
    params: GenerationParams,
) -> VendorRequest:
    """Build the invoke-path payload for a model identifier."""
    for matches, builder in REQUEST_BUILDERS:
        if matches(model_id):
            return builder(messages, params)
    return build_generic_request(messages, params)


def build_converse_request(
    messages: List[ConversationMessage],
    params: GenerationParams,
) -> ConverseRequest:
    """Build the Converse API payload used on the bearer-token path.

    The system block is sent only for a non-blank prompt, and the inference
    block only when at least one sampling value is set.
    """
    converse_messages = [
        ConverseMessage(role=m.role, content=[ConverseText(text=m.content)])
        for m in messages
    ]

    system = None
    if params.system_prompt and params.system_prompt.strip():
        system = [ConverseText(text=params.system_prompt)]

    inference_config = None
    if any(
        value is not None
        for value in (params.max_tokens, params.temperature, params.top_p, params.stop_sequences)
    ):
        inference_config = ConverseInferenceConfig(
            max_tokens=params.max_tokens,
            temperature=params.temperature,
            top_p=params.top_p,
            stop_sequences=params.stop_sequences,
        )

    return ConverseRequest(
        messages=converse_messages,
        system=system,
        inference_config=inference_config,
    )
