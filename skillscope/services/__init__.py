"""Service clients for skillscope."""

from skillscope.services.anthropic_client import AnthropicClient, KeyCheckResult

__all__ = ["AnthropicClient", "KeyCheckResult"]
