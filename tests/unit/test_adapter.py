"""Unit tests for Bedrock request preparation."""

import json

import pytest

from bedrock_gateway.config.settings import GatewaySettings
from bedrock_gateway.models.conversation_types import ConversationMessage, TurnRole
from bedrock_gateway.models.generation import GenerationParams
from bedrock_gateway.providers.bedrock.adapter import BedrockProvider, DecodeStrategy
from tests.helpers.streaming_mocks import FakeTransport

CLAUDE = "anthropic.claude-3-haiku-20240307-v1:0"


@pytest.fixture
def provider():
    return BedrockProvider(FakeTransport())


@pytest.fixture
def messages():
    return [ConversationMessage(role=TurnRole.USER, content="Hi")]


def test_signing_credential_uses_invoke_stream(provider, signing_credential, messages):
    call = provider.prepare(signing_credential, CLAUDE, messages, GenerationParams())

    assert call.strategy is DecodeStrategy.LINE_EVENTS
    assert call.request.method == "POST"
    assert call.request.url == (
        "https://bedrock-runtime.us-east-1.amazonaws.com"
        "/model/anthropic.claude-3-haiku-20240307-v1%3A0/invoke-with-response-stream"
    )
    headers = call.request.headers
    assert headers["Authorization"].startswith("AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/")
    assert "/us-east-1/bedrock/aws4_request" in headers["Authorization"]
    assert headers["Host"] == "bedrock-runtime.us-east-1.amazonaws.com"
    assert headers["Accept"] == "application/vnd.amazon.eventstream"
    assert json.loads(call.request.body)["anthropic_version"] == "bedrock-2023-05-31"


def test_bearer_credential_uses_converse(provider, bearer_credential, messages):
    call = provider.prepare(bearer_credential, CLAUDE, messages, GenerationParams(max_tokens=10))

    assert call.strategy is DecodeStrategy.SINGLE_DOCUMENT
    assert call.request.url == (
        "https://bedrock-runtime.us-west-2.amazonaws.com"
        "/model/anthropic.claude-3-haiku-20240307-v1%3A0/converse"
    )
    assert call.request.headers["Authorization"] == "Bearer test-bedrock-key"
    assert json.loads(call.request.body) == {
        "messages": [{"role": "user", "content": [{"text": "Hi"}]}],
        "inferenceConfig": {"maxTokens": 10},
    }


def test_endpoint_override(bearer_credential, messages):
    provider = BedrockProvider(FakeTransport(), GatewaySettings(endpoint_host="localhost:4566"))

    call = provider.prepare(bearer_credential, "amazon.titan-text-express-v1", messages, GenerationParams())

    assert call.request.url == "https://localhost:4566/model/amazon.titan-text-express-v1/converse"


def test_unsupported_credential(provider, messages):
    with pytest.raises(TypeError):
        provider.prepare(object(), CLAUDE, messages, GenerationParams())


def test_provider_name(provider):
    assert provider.get_provider_name() == "bedrock"


def test_plain_http_endpoint_override(signing_credential, messages):
    settings = GatewaySettings(endpoint_host="localhost:4566", endpoint_scheme="http")
    provider = BedrockProvider(FakeTransport(), settings)

    call = provider.prepare(signing_credential, "amazon.titan-text-express-v1", messages, GenerationParams())

    assert call.request.url == "http://localhost:4566/model/amazon.titan-text-express-v1/invoke-with-response-stream"
    assert call.request.headers["Host"] == "localhost:4566"
