"""Wiring lazy do gateway do webhook (inicializado na primeira requisição)."""

from __future__ import annotations

import logging

from api.connectors.n8n import N8nRelayClient
from api.routes.webhook.gateway import WebhookGateway
from app.bootstrap import get_audit_store, get_rate_limit_store, get_workshop_store
from app.bootstrap.dependencies import (
    create_action_dispatcher,
    create_audit_logger,
    create_rate_limiter,
)
from config.settings import get_relay_settings, get_webhook_settings

logger = logging.getLogger(__name__)

_gateway: WebhookGateway | None = None


def build_webhook_gateway() -> WebhookGateway:
    """Monta o gateway com stores e settings do ambiente."""
    relay_settings = get_relay_settings()
    if not relay_settings.enabled:
        logger.warning("n8n_relay_not_configured")
    return WebhookGateway(
        settings=get_webhook_settings(),
        rate_limiter=create_rate_limiter(get_rate_limit_store()),
        dispatcher=create_action_dispatcher(get_workshop_store()),
        audit_logger=create_audit_logger(get_audit_store()),
        relay=N8nRelayClient(relay_settings),
    )


def get_webhook_gateway() -> WebhookGateway:
    global _gateway
    if _gateway is None:
        _gateway = build_webhook_gateway()
    return _gateway


def reset_webhook_gateway() -> None:
    """Descarta o singleton (testes e troca de settings)."""
    global _gateway
    _gateway = None
