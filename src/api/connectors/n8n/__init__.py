"""Conector do relay n8n."""

from api.connectors.n8n.relay_client import RELAY_NOT_CONFIGURED, N8nRelayClient

__all__ = ["RELAY_NOT_CONFIGURED", "N8nRelayClient"]
