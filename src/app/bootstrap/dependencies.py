"""Factories de stores e serviços: criação de implementações concretas.

Os backends são escolhidos pelas settings de ambiente; `memory` é
para desenvolvimento e testes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.stores import (
    FirestoreAuditStore,
    FirestoreWorkshopStore,
    MemoryAuditStore,
    MemoryRateLimitStore,
    MemoryWorkshopStore,
    RedisRateLimitStore,
)
from app.services.audit_logger import WebhookAuditLogger
from app.services.rate_limiter import RateLimiter
from app.use_cases.webhook.dispatcher import WebhookActionDispatcher
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_webhook_settings,
)

if TYPE_CHECKING:
    from app.protocols.audit_store import AuditStoreProtocol
    from app.protocols.rate_limit_store import RateLimitStoreProtocol
    from app.protocols.workshop_store import WorkshopStoreProtocol

logger = logging.getLogger(__name__)


def _warn_memory_outside_dev(store_name: str) -> None:
    environment = get_base_settings().environment
    if environment != "development":
        logger.warning(
            "memory_store_in_non_dev",
            extra={"store": store_name, "environment": environment},
        )


# ──────────────────────────────────────────────────────────────────────────────
# Workshop / Audit Store Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_workshop_store() -> WorkshopStoreProtocol:
    """Cria store da oficina conforme WORKSHOP_STORE_BACKEND."""
    settings = get_firestore_settings()
    if settings.workshop_backend == "firestore":
        logger.info("workshop_store_created", extra={"backend": "firestore"})
        return FirestoreWorkshopStore(create_firestore_client(), settings)

    _warn_memory_outside_dev("workshop")
    logger.info("workshop_store_created", extra={"backend": "memory"})
    return MemoryWorkshopStore()


def create_audit_store() -> AuditStoreProtocol:
    """Cria store de auditoria conforme AUDIT_STORE_BACKEND."""
    settings = get_firestore_settings()
    if settings.audit_backend == "firestore":
        logger.info("audit_store_created", extra={"backend": "firestore"})
        return FirestoreAuditStore(
            create_firestore_client(),
            collection_name=settings.collection_webhook_logs,
        )

    _warn_memory_outside_dev("audit")
    logger.info("audit_store_created", extra={"backend": "memory"})
    return MemoryAuditStore()


# ──────────────────────────────────────────────────────────────────────────────
# Rate Limit Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_rate_limit_store() -> RateLimitStoreProtocol:
    """Cria store dos contadores conforme RATE_LIMIT_BACKEND."""
    backend = get_webhook_settings().rate_limit_backend
    if backend == "redis":
        logger.info("rate_limit_store_created", extra={"backend": "redis"})
        return RedisRateLimitStore(create_async_redis_client())

    _warn_memory_outside_dev("rate_limit")
    logger.info("rate_limit_store_created", extra={"backend": "memory"})
    return MemoryRateLimitStore()


def create_rate_limiter(store: RateLimitStoreProtocol | None = None) -> RateLimiter:
    settings = get_webhook_settings()
    return RateLimiter(
        create_rate_limit_store() if store is None else store,
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Webhook services
# ──────────────────────────────────────────────────────────────────────────────


def create_action_dispatcher(
    store: WorkshopStoreProtocol | None = None,
) -> WebhookActionDispatcher:
    return WebhookActionDispatcher(create_workshop_store() if store is None else store)


def create_audit_logger(store: AuditStoreProtocol | None = None) -> WebhookAuditLogger:
    return WebhookAuditLogger(create_audit_store() if store is None else store)
