"""Anthropic Messages API client for remote analysis."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from skillscope.config import AnalyzerSettings
from skillscope.errors import (
    ConfigError,
    RemoteRequestError,
    RemoteResponseError,
    RemoteStatusError,
)
from skillscope.observability import NetworkLog

logger = logging.getLogger("skillscope.services.anthropic")

KEY_CHECK_PROMPT = "Say ok"
KEY_CHECK_MAX_TOKENS = 10
NETWORK_ERROR_MESSAGE = "Network error - check your connection"
INVALID_KEY_MESSAGE = "Invalid key"


@dataclass(frozen=True, slots=True)
class KeyCheckResult:
    success: bool
    error: str | None = None


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        if isinstance(message, str) and message:
            return message
    return None


class AnthropicClient:
    """Async Anthropic Messages API wrapper.

    Every request goes through the network log so callers can inspect what was
    sent. ``transport`` is passed to ``httpx.AsyncClient``; tests use it to
    plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: AnalyzerSettings,
        *,
        network_log: NetworkLog | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.network_log = network_log or NetworkLog()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.timeout_seconds,
                transport=self._transport,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        if not self.settings.api_key:
            raise ConfigError("ANTHROPIC_API_KEY not set")
        return {
            "Content-Type": "application/json",
            "x-api-key": self.settings.api_key,
            "anthropic-version": self.settings.api_version,
            "anthropic-dangerous-direct-browser-access": "true",
        }

    def _body(self, prompt: str, max_tokens: int) -> bytes:
        payload = {
            "model": self.settings.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        return json.dumps(payload).encode("utf-8")

    async def _post(self, prompt: str, *, max_tokens: int, label: str) -> httpx.Response:
        headers = self._headers()
        body = self._body(prompt, max_tokens)
        url = self.settings.api_url
        async with self.network_log.track(label, "POST", url, len(body)) as call:
            try:
                response = await self.client.post(url, content=body, headers=headers)
            except httpx.HTTPError as exc:
                logger.warning("Request %r failed: %s", label, exc)
                raise RemoteRequestError(str(exc) or type(exc).__name__) from exc
            call["status"] = response.status_code
        return response

    async def complete(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        label: str = "Analysis request",
    ) -> str:
        """Send a single-turn prompt and return the concatenated text blocks."""
        response = await self._post(
            prompt,
            max_tokens=max_tokens or self.settings.max_tokens,
            label=label,
        )
        if not response.is_success:
            message = _error_message(response) or f"API error ({response.status_code})"
            raise RemoteStatusError(message, response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteResponseError("Response body is not valid JSON") from exc
        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, list):
            raise RemoteResponseError("Response has no content blocks")
        return "".join(
            block.get("text") or ""
            for block in content
            if isinstance(block, dict) and block.get("type") == "text"
        )

    async def test_api_key(self) -> KeyCheckResult:
        """Probe the credential with a tiny request. Never raises."""
        try:
            response = await self._post(
                KEY_CHECK_PROMPT,
                max_tokens=KEY_CHECK_MAX_TOKENS,
                label="API key check",
            )
        except ConfigError as exc:
            return KeyCheckResult(success=False, error=str(exc))
        except RemoteRequestError:
            return KeyCheckResult(success=False, error=NETWORK_ERROR_MESSAGE)

        if response.is_success:
            return KeyCheckResult(success=True)
        return KeyCheckResult(success=False, error=_error_message(response) or INVALID_KEY_MESSAGE)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> AnthropicClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["AnthropicClient", "KeyCheckResult", "NETWORK_ERROR_MESSAGE", "INVALID_KEY_MESSAGE"]
