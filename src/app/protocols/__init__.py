"""Protocolos e contratos do core da aplicação."""

from .audit_store import AuditStoreProtocol
from .rate_limit_store import RateLimitStoreProtocol
from .relay import RelayClientProtocol, RelayResult
from .workshop_store import WorkshopStoreProtocol

__all__ = [
    "AuditStoreProtocol",
    "RateLimitStoreProtocol",
    "RelayClientProtocol",
    "RelayResult",
    "WorkshopStoreProtocol",
]
