"""Analyzer configuration.

Settings come from the environment (optionally populated from a ``.env`` file
by python-dotenv). ``validate()`` is called by everything that is about to act
on the settings, so a bad value surfaces as ``ConfigError`` before any work
starts.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from skillscope.errors import ConfigError

MODE_HEURISTIC = "heuristic"
MODE_REMOTE = "remote"
MODES = (MODE_HEURISTIC, MODE_REMOTE)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_LOG_LEVEL = "WARNING"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class AnalyzerSettings:
    mode: str = MODE_HEURISTIC
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        dotenv: bool = True,
    ) -> AnalyzerSettings:
        """Build settings from ``env`` (``os.environ`` when omitted).

        With ``dotenv`` set and no explicit ``env``, a ``.env`` file in the
        working directory is loaded first; existing variables win.
        """
        if env is None:
            if dotenv:
                load_dotenv(Path.cwd() / ".env")
            env = os.environ
        return cls(
            mode=(env.get("SKILLSCOPE_MODE") or MODE_HEURISTIC).strip().lower(),
            api_key=env.get("ANTHROPIC_API_KEY") or None,
            model=env.get("SKILLSCOPE_MODEL") or DEFAULT_MODEL,
            api_url=env.get("SKILLSCOPE_API_URL") or DEFAULT_API_URL,
            api_version=env.get("SKILLSCOPE_API_VERSION") or DEFAULT_API_VERSION,
            max_tokens=_env_int(env, "SKILLSCOPE_MAX_TOKENS", DEFAULT_MAX_TOKENS),
            timeout_seconds=_env_float(env, "SKILLSCOPE_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
            log_level=(env.get("SKILLSCOPE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper(),
        )

    @property
    def is_remote(self) -> bool:
        return self.mode == MODE_REMOTE

    def validate(self) -> AnalyzerSettings:
        """Raise ``ConfigError`` on invalid settings; return ``self`` otherwise."""
        if self.mode not in MODES:
            raise ConfigError(
                f"Unknown analysis mode {self.mode!r}; expected one of {', '.join(MODES)}"
            )
        if self.max_tokens <= 0:
            raise ConfigError("max_tokens must be positive")
        if self.timeout_seconds <= 0:
            raise ConfigError("timeout_seconds must be positive")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown log level {self.log_level!r}")
        if self.is_remote and not self.api_key:
            raise ConfigError("Remote analysis requires ANTHROPIC_API_KEY to be set")
        return self

    def with_overrides(self, **overrides: Any) -> AnalyzerSettings:
        """Copy with the given fields replaced; ``None`` values are ignored."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    def redacted(self) -> dict[str, Any]:
        """Settings as a dict, safe to log."""
        return {
            "mode": self.mode,
            "api_key": "set" if self.api_key else None,
            "model": self.model,
            "api_url": self.api_url,
            "api_version": self.api_version,
            "max_tokens": self.max_tokens,
            "timeout_seconds": self.timeout_seconds,
            "log_level": self.log_level,
        }


__all__ = [
    "AnalyzerSettings",
    "MODE_HEURISTIC",
    "MODE_REMOTE",
    "MODES",
    "DEFAULT_MODEL",
    "DEFAULT_API_URL",
    "DEFAULT_API_VERSION",
    "DEFAULT_MAX_TOKENS",
]
