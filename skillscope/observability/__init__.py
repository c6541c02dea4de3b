"""skillscope observability module - outbound request tracking."""

from skillscope.observability.network_log import NetworkLog, NetworkRequest

__all__ = ["NetworkLog", "NetworkRequest"]
