"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - firestore_workshop_store: clientes, veículos e OS no Firestore
    - firestore_audit_store: log de chamadas do webhook no Firestore
    - redis_rate_limit_store: contadores de rate limit no Redis (Upstash)
    - memory_stores: stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_audit_store import FirestoreAuditStore
from app.infra.stores.firestore_workshop_store import FirestoreWorkshopStore
from app.infra.stores.memory_stores import (
    MemoryAuditStore,
    MemoryRateLimitStore,
    MemoryWorkshopStore,
)
from app.infra.stores.redis_rate_limit_store import RedisRateLimitStore

__all__ = [
    # Firestore
    "FirestoreAuditStore",
    "FirestoreWorkshopStore",
    # Memory (dev/test)
    "MemoryAuditStore",
    "MemoryRateLimitStore",
    "MemoryWorkshopStore",
    # Redis (Upstash)
    "RedisRateLimitStore",
]
