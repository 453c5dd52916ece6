"""Shared pytest fixtures for Bedrock Gateway tests."""

from datetime import datetime, timezone

import pytest

from bedrock_gateway.api.client import BedrockGateway
from bedrock_gateway.config.settings import GatewaySettings
from bedrock_gateway.core.credentials import CredentialStore
from bedrock_gateway.models.conversation_types import ConversationMessage, TurnRole
from bedrock_gateway.models.credentials import BearerCredential, SigningCredential


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests through the gateway facade")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove gateway-related environment variables."""
    for key in (
        "BEDROCK_AUTH_METHOD", "BEDROCK_API_KEY", "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY", "AWS_SESSION_TOKEN", "BEDROCK_REGION",
        "AWS_REGION", "BEDROCK_ENDPOINT_URL", "BEDROCK_TIMEOUT_SECONDS",
        "BEDROCK_CONNECT_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def signing_credential():
    """Example access key pair from the AWS documentation."""
    return SigningCredential(
        access_key_id="AKIDEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
        region="us-east-1",
    )


@pytest.fixture
def bearer_credential():
    return BearerCredential(api_key="test-bedrock-key", region="us-west-2")


@pytest.fixture
def fixed_time():
    return datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_conversation():
    """User / assistant / user exchange."""
    return [
        ConversationMessage(role=TurnRole.USER, content="What is 2+2?"),
        ConversationMessage(role=TurnRole.ASSISTANT, content="4"),
        ConversationMessage(role=TurnRole.USER, content="And 3+3?"),
    ]


@pytest.fixture
def make_gateway():
    """Factory building a gateway around a credential and a fake transport."""

    def _make(credential, transport, settings=None):
        return BedrockGateway(
            CredentialStore(credential),
            transport=transport,
            settings=settings or GatewaySettings(),
        )

    return _make
