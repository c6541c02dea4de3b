"""Analysis backends and the registry that selects one from settings."""

from __future__ import annotations

from collections.abc import Callable

from skillscope.backends.base import AnalysisBackend
from skillscope.backends.heuristic import HeuristicBackend
from skillscope.backends.remote import RemoteBackend, parse_json_response
from skillscope.config import MODE_HEURISTIC, MODE_REMOTE, AnalyzerSettings
from skillscope.errors import ConfigError
from skillscope.observability import NetworkLog
from skillscope.services.anthropic_client import AnthropicClient

BackendFactory = Callable[
    [AnalyzerSettings, AnthropicClient | None, NetworkLog | None], AnalysisBackend
]


def _heuristic(
    settings: AnalyzerSettings,
    client: AnthropicClient | None,
    network_log: NetworkLog | None,
) -> AnalysisBackend:
    return HeuristicBackend()


def _remote(
    settings: AnalyzerSettings,
    client: AnthropicClient | None,
    network_log: NetworkLog | None,
) -> AnalysisBackend:
    return RemoteBackend(client or AnthropicClient(settings, network_log=network_log))


BACKENDS: dict[str, BackendFactory] = {
    MODE_HEURISTIC: _heuristic,
    MODE_REMOTE: _remote,
}


def create_backend(
    settings: AnalyzerSettings,
    client: AnthropicClient | None = None,
    *,
    network_log: NetworkLog | None = None,
) -> AnalysisBackend:
    """Instantiate the backend named by ``settings.mode``."""
    factory = BACKENDS.get(settings.mode)
    if factory is None:
        raise ConfigError(f"Unknown analysis mode {settings.mode!r}")
    settings.validate()
    return factory(settings, client, network_log)


__all__ = [
    "AnalysisBackend",
    "BACKENDS",
    "HeuristicBackend",
    "RemoteBackend",
    "create_backend",
    "parse_json_response",
]
