"""Agregador de settings do gateway da oficina.

Um módulo por preocupação; todos carregados de variáveis de ambiente
e cacheados via lru_cache.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.infra import (
    FirestoreSettings,
    StoreBackend,
    get_firestore_settings,
)
from config.settings.relay import RelaySettings, get_relay_settings
from config.settings.webhook import (
    DEFAULT_MAX_PAYLOAD_BYTES,
    RateLimitBackend,
    WebhookSettings,
    get_webhook_settings,
)

__all__ = [
    "DEFAULT_MAX_PAYLOAD_BYTES",
    "BaseSettings",
    "Environment",
    "FirestoreSettings",
    "RateLimitBackend",
    "RelaySettings",
    "StoreBackend",
    "WebhookSettings",
    "get_base_settings",
    "get_firestore_settings",
    "get_relay_settings",
    "get_webhook_settings",
]
