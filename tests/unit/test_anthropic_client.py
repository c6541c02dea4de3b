"""Tests for the Anthropic Messages API client."""

import json

import httpx
import pytest

from skillscope.config import MODE_REMOTE, AnalyzerSettings
from skillscope.errors import (
    ConfigError,
    RemoteRequestError,
    RemoteResponseError,
    RemoteStatusError,
)
from skillscope.services.anthropic_client import (
    INVALID_KEY_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    AnthropicClient,
)
from skillscope.testing import (
    TEST_API_KEY,
    anthropic_error,
    anthropic_reply,
    create_mock_client,
    create_test_settings,
)


def _offline(request):
    raise httpx.ConnectError("connection refused", request=request)


class TestComplete:
    """Tests for AnthropicClient.complete."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        client, captured = create_mock_client([anthropic_reply("hello")])

        text = await client.complete("Analyze this", max_tokens=100)

        assert text == "hello"
        [request] = captured
        assert request.method == "POST"
        assert str(request.url) == client.settings.api_url
        assert request.headers["x-api-key"] == TEST_API_KEY
        assert request.headers["anthropic-version"] == "2023-06-01"
        assert request.headers["anthropic-dangerous-direct-browser-access"] == "true"
        assert json.loads(request.content) == {
            "model": client.settings.model,
            "max_tokens": 100,
            "messages": [{"role": "user", "content": "Analyze this"}],
        }

    @pytest.mark.asyncio
    async def test_default_max_tokens(self):
        client, captured = create_mock_client(
            [anthropic_reply("ok")], settings=create_test_settings(max_tokens=321)
        )

        await client.complete("x")

        assert json.loads(captured[0].content)["max_tokens"] == 321

    @pytest.mark.asyncio
    async def test_joins_text_blocks(self):
        response = httpx.Response(
            200,
            json={
                "content": [
                    {"type": "text", "text": "part one, "},
                    {"type": "tool_use", "id": "t1"},
                    {"type": "text", "text": "part two"},
                ]
            },
        )
        client, _ = create_mock_client([response])

        assert await client.complete("x") == "part one, part two"

    @pytest.mark.asyncio
    async def test_status_error_uses_body_message(self):
        client, _ = create_mock_client([anthropic_error("Overloaded", 529)])

        with pytest.raises(RemoteStatusError, match="Overloaded") as exc_info:
            await client.complete("x")

        assert exc_info.value.status_code == 529

    @pytest.mark.asyncio
    async def test_status_error_without_message(self):
        client, _ = create_mock_client([httpx.Response(500, text="oops")])

        with pytest.raises(RemoteStatusError, match=r"API error \(500\)"):
            await client.complete("x")

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        client, _ = create_mock_client([httpx.Response(200, text="not json")])

        with pytest.raises(RemoteResponseError):
            await client.complete("x")

    @pytest.mark.asyncio
    async def test_missing_content(self):
        client, _ = create_mock_client([httpx.Response(200, json={"id": "msg"})])

        with pytest.raises(RemoteResponseError, match="no content"):
            await client.complete("x")

    @pytest.mark.asyncio
    async def test_network_failure(self, network_log):
        client, _ = create_mock_client(_offline, network_log=network_log)

        with pytest.raises(RemoteRequestError):
            await client.complete("x", label="Profile analysis")

        [entry] = network_log.snapshot()
        assert entry.label == "Profile analysis"
        assert entry.error

    @pytest.mark.asyncio
    async def test_missing_key_sends_nothing(self, network_log):
        client, captured = create_mock_client(
            [anthropic_reply("ok")],
            settings=AnalyzerSettings(mode=MODE_REMOTE),
            network_log=network_log,
        )

        with pytest.raises(ConfigError):
            await client.complete("x")

        assert captured == []
        assert len(network_log) == 0

    @pytest.mark.asyncio
    async def test_request_logged(self, network_log):
        client, _ = create_mock_client([anthropic_reply("ok")], network_log=network_log)

        await client.complete("x", label="Skill matching")

        [entry] = network_log.snapshot()
        assert entry.label == "Skill matching"
        assert entry.method == "POST"
        assert entry.status == 200
        assert entry.body_bytes > 0


class TestApiKeyCheck:
    """Tests for AnthropicClient.test_api_key."""

    @pytest.mark.asyncio
    async def test_valid_key(self):
        client, captured = create_mock_client([anthropic_reply("ok")])

        result = await client.test_api_key()

        assert result.success
        assert result.error is None
        assert json.loads(captured[0].content)["max_tokens"] == 10

    @pytest.mark.asyncio
    async def test_rejected_key_uses_body_message(self):
        client, _ = create_mock_client([anthropic_error("invalid x-api-key", 401)])

        result = await client.test_api_key()

        assert not result.success
        assert result.error == "invalid x-api-key"

    @pytest.mark.asyncio
    async def test_rejected_key_without_message(self):
        client, _ = create_mock_client([anthropic_error(None, 401)])

        result = await client.test_api_key()

        assert result.error == INVALID_KEY_MESSAGE

    @pytest.mark.asyncio
    async def test_network_error(self):
        client, _ = create_mock_client(_offline)

        result = await client.test_api_key()

        assert not result.success
        assert result.error == NETWORK_ERROR_MESSAGE
        assert result.error == "Network error - check your connection"

    @pytest.mark.asyncio
    async def test_missing_key(self):
        client = AnthropicClient(AnalyzerSettings(mode=MODE_REMOTE))

        result = await client.test_api_key()

        assert not result.success
        assert "ANTHROPIC_API_KEY" in result.error

    @pytest.mark.asyncio
    async def test_check_is_logged(self, network_log):
        client, _ = create_mock_client([anthropic_reply("ok")], network_log=network_log)

        await client.test_api_key()

        assert network_log.snapshot()[0].label == "API key check"


class TestLifecycle:
    """Tests for client lifecycle."""

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        client, _ = create_mock_client([anthropic_reply("ok")])

        async with client:
            await client.complete("x")
            assert client._client is not None

        assert client._client is None
