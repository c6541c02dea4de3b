"""Pytest configuration for skillscope tests."""

import pytest

from skillscope.archive import normalize_export
from skillscope.events import CollectingEventSink, clear_event_sink
from skillscope.observability import NetworkLog
from skillscope.samples import load_sample_conversations


@pytest.fixture(autouse=True)
def _reset_event_sink():
    """Keep the context event sink from leaking between tests."""
    clear_event_sink()
    yield
    clear_event_sink()


@pytest.fixture
def sample_archive():
    """Raw sample conversations in export shape."""
    return load_sample_conversations()


@pytest.fixture
def sample_conversations(sample_archive):
    """Normalized sample conversations."""
    return normalize_export(sample_archive)


@pytest.fixture
def collecting_sink():
    return CollectingEventSink()


@pytest.fixture
def network_log(collecting_sink):
    return NetworkLog(event_sink=collecting_sink)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every skillscope-related variable from the environment."""
    for name in (
        "SKILLSCOPE_MODE",
        "ANTHROPIC_API_KEY",
        "SKILLSCOPE_MODEL",
        "SKILLSCOPE_API_URL",
        "SKILLSCOPE_API_VERSION",
        "SKILLSCOPE_MAX_TOKENS",
        "SKILLSCOPE_TIMEOUT",
        "SKILLSCOPE_LOG_LEVEL",
    ):
        # setenv first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
