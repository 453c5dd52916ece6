"""End-to-end tests for the gateway facade over fake and httpx transports."""

import httpx
import pytest

from bedrock_gateway import (
    BearerCredential,
    ContentDelta,
    EndOfStream,
    ErrorChunk,
    ErrorKind,
    SigningCredential,
)
from bedrock_gateway.api.client import BedrockGateway
from bedrock_gateway.core.credentials import CredentialStore
from bedrock_gateway.http.transport import HttpxTransport
from tests.helpers.streaming_mocks import FakeChannel, FakeTransport, claude_delta_lines

CLAUDE = "anthropic.claude-3-haiku-20240307-v1:0"
CONVERSE_OK = '{"output":{"message":{"role":"assistant","content":[{"text":"hi"}]}},"stopReason":"end_turn"}'


async def collect(stream):
    return [chunk async for chunk in stream]


@pytest.mark.integration
class TestGatewayStream:
    """Test the full stream pipeline with a fake transport."""

    @pytest.mark.asyncio
    async def test_missing_credentials_never_reach_transport(self, make_gateway):
        transport = FakeTransport()
        gateway = make_gateway(None, transport)

        chunks = await collect(gateway.stream([("user", "Hi")], CLAUDE, include_end=True))

        assert chunks == [ErrorChunk(ErrorKind.AUTH_ERROR, "Bedrock credentials not configured")]
        assert transport.calls == 0

    @pytest.mark.asyncio
    async def test_incomplete_credentials_never_reach_transport(self, make_gateway):
        transport = FakeTransport()
        gateway = make_gateway(SigningCredential(access_key_id="AKID"), transport)

        chunks = await collect(gateway.stream([("user", "Hi")], CLAUDE))

        assert len(chunks) == 1
        assert chunks[0].kind == ErrorKind.AUTH_ERROR
        assert transport.calls == 0

    @pytest.mark.asyncio
    async def test_signed_line_stream(self, make_gateway, signing_credential, sample_conversation):
        channel = FakeChannel(claude_delta_lines(["Hello", " world"]))
        transport = FakeTransport(channel)
        gateway = make_gateway(signing_credential, transport)

        chunks = await collect(gateway.stream(sample_conversation, CLAUDE, system_prompt="Be brief"))

        assert chunks == [ContentDelta("Hello"), ContentDelta(" world")]
        request = transport.requests[0]
        assert request.url.endswith("/invoke-with-response-stream")
        assert request.headers["Authorization"].startswith("AWS4-HMAC-SHA256 ")
        assert channel.close_calls == 1

    @pytest.mark.asyncio
    async def test_bearer_single_document(self, make_gateway, bearer_credential):
        channel = FakeChannel(body=CONVERSE_OK)
        transport = FakeTransport(channel)
        gateway = make_gateway(bearer_credential, transport)

        chunks = await collect(gateway.stream([("user", "Hi")], CLAUDE, include_end=True))

        assert chunks == [ContentDelta("hi"), EndOfStream()]
        assert transport.requests[0].url.endswith("/converse")
        assert transport.requests[0].headers["Authorization"] == "Bearer test-bedrock-key"
        assert channel.close_calls == 1

    @pytest.mark.asyncio
    async def test_transport_failure_is_network_error(self, make_gateway, bearer_credential):
        transport = FakeTransport(error=httpx.ConnectError("Connection refused"))
        gateway = make_gateway(bearer_credential, transport)

        chunks = await collect(gateway.stream([("user", "Hi")], CLAUDE, include_end=True))

        assert chunks == [ErrorChunk(ErrorKind.NETWORK_ERROR, "Connection refused")]

    @pytest.mark.asyncio
    async def test_http_status_is_api_error(self, make_gateway, signing_credential):
        channel = FakeChannel(status_code=403, body='{"message":"The request signature we calculated does not match"}')
        gateway = make_gateway(signing_credential, FakeTransport(channel))

        chunks = await collect(gateway.stream([("user", "Hi")], CLAUDE, include_end=True))

        assert chunks == [ErrorChunk(ErrorKind.API_ERROR, "The request signature we calculated does not match")]
        assert channel.close_calls == 1

    @pytest.mark.asyncio
    async def test_failure_mid_stream_keeps_earlier_content(self, make_gateway, signing_credential):
        channel = FakeChannel(['data: {"text":"a"}'], error_after=1, error=httpx.ReadError("connection lost"))
        gateway = make_gateway(signing_credential, FakeTransport(channel))

        chunks = await collect(gateway.stream([("user", "Hi")], "cohere.command-text-v14", include_end=True))

        assert chunks == [ContentDelta("a"), ErrorChunk(ErrorKind.NETWORK_ERROR, "connection lost")]
        assert channel.close_calls == 1

    @pytest.mark.asyncio
    async def test_unparseable_line_does_not_end_stream(self, make_gateway, signing_credential):
        channel = FakeChannel([
            'data: {"text":"a"}',
            "data: " + "[" * 200000,
            'data: {"text":"b"}',
            "data: [DONE]",
        ])
        gateway = make_gateway(signing_credential, FakeTransport(channel))

        chunks = await collect(gateway.stream([("user", "Hi")], "cohere.command-text-v14"))

        assert chunks == [ContentDelta("a"), ContentDelta("b")]

    @pytest.mark.asyncio
    async def test_nothing_after_vendor_error(self, make_gateway, signing_credential):
        channel = FakeChannel([
            'data: {"delta":{"text":"x"}}',
            'data: {"error":{"message":"Throttled"}}',
            'data: {"delta":{"text":"y"}}',
        ])
        gateway = make_gateway(signing_credential, FakeTransport(channel))

        chunks = await collect(gateway.stream([("user", "Hi")], CLAUDE, include_end=True))

        assert chunks == [ContentDelta("x"), ErrorChunk(ErrorKind.API_ERROR, "Throttled")]

    @pytest.mark.asyncio
    async def test_clean_close_without_end_marker(self, make_gateway, bearer_credential):
        gateway = make_gateway(bearer_credential, FakeTransport(FakeChannel(body='{"usage":{}}')))

        assert await collect(gateway.stream([("user", "Hi")], CLAUDE)) == []

    @pytest.mark.asyncio
    async def test_consumer_stop_closes_channel_once(self, make_gateway, signing_credential):
        channel = FakeChannel(claude_delta_lines(["a", "b", "c"]))
        gateway = make_gateway(signing_credential, FakeTransport(channel))

        stream = gateway.stream([("user", "Hi")], CLAUDE)
        first = await stream.__anext__()
        await stream.aclose()

        assert first == ContentDelta("a")
        assert channel.close_calls == 1

    @pytest.mark.asyncio
    async def test_credential_change_applies_to_next_call(self, make_gateway, bearer_credential):
        transport = FakeTransport(FakeChannel(body=CONVERSE_OK))
        gateway = make_gateway(bearer_credential, transport)

        await collect(gateway.stream([("user", "Hi")], CLAUDE))
        gateway.credential_store.set_credentials(BearerCredential(api_key="rotated", region="eu-west-1"))
        await collect(gateway.stream([("user", "Hi")], CLAUDE))

        assert transport.requests[0].headers["Authorization"] == "Bearer test-bedrock-key"
        assert transport.requests[1].headers["Authorization"] == "Bearer rotated"
        assert "eu-west-1" in transport.requests[1].url

    @pytest.mark.asyncio
    async def test_complete(self, make_gateway, bearer_credential):
        gateway = make_gateway(bearer_credential, FakeTransport(FakeChannel(body=CONVERSE_OK)))

        result = await gateway.complete([("user", "Hi")], CLAUDE, max_tokens=20)

        assert result.ok
        assert result.text == "hi"

    @pytest.mark.asyncio
    async def test_complete_with_error(self, make_gateway):
        gateway = make_gateway(None, FakeTransport())

        result = await gateway.complete([("user", "Hi")], CLAUDE)

        assert not result.ok
        assert result.text == ""
        assert result.error.kind == ErrorKind.AUTH_ERROR


@pytest.mark.integration
class TestHttpxTransport:
    """Test the gateway over httpx with a mock transport."""

    @staticmethod
    def gateway_for(credential, handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return BedrockGateway(CredentialStore(credential), transport=HttpxTransport(client=client))

    @pytest.mark.asyncio
    async def test_signed_event_stream(self, signing_credential):
        seen = []

        def handler(request):
            seen.append(request)
            body = "\n".join(claude_delta_lines(["Hi", "!"])) + "\n"
            return httpx.Response(200, content=body.encode("utf-8"))

        gateway = self.gateway_for(signing_credential, handler)
        chunks = await collect(gateway.stream([("user", "Hello")], CLAUDE))

        assert chunks == [ContentDelta("Hi"), ContentDelta("!")]
        assert seen[0].headers["authorization"].startswith("AWS4-HMAC-SHA256 ")
        assert "x-amz-date" in seen[0].headers
        assert "invoke-with-response-stream" in seen[0].url.path

    @pytest.mark.asyncio
    async def test_bearer_converse(self, bearer_credential):
        def handler(request):
            assert request.headers["authorization"] == "Bearer test-bedrock-key"
            return httpx.Response(200, content=CONVERSE_OK.encode("utf-8"))

        gateway = self.gateway_for(bearer_credential, handler)
        result = await gateway.complete([("user", "Hello")], CLAUDE)

        assert result.text == "hi"

    @pytest.mark.asyncio
    async def test_error_status(self, bearer_credential):
        def handler(request):
            return httpx.Response(429, json={"message": "Too many requests"})

        gateway = self.gateway_for(bearer_credential, handler)
        chunks = await collect(gateway.stream([("user", "Hello")], CLAUDE))

        assert chunks == [ErrorChunk(ErrorKind.API_ERROR, "Too many requests")]

    @pytest.mark.asyncio
    async def test_timeout(self, bearer_credential):
        def handler(request):
            raise httpx.ReadTimeout("", request=request)

        gateway = self.gateway_for(bearer_credential, handler)
        chunks = await collect(gateway.stream([("user", "Hello")], CLAUDE))

        assert chunks == [ErrorChunk(ErrorKind.NETWORK_ERROR, "Request timed out")]
