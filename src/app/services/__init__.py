"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.audit_logger import WebhookAuditLogger
from app.services.payload_masking import mask_sensitive_data
from app.services.rate_limiter import RateLimitDecision, RateLimiter

__all__ = [
    "RateLimitDecision",
    "RateLimiter",
    "WebhookAuditLogger",
    "mask_sensitive_data",
]
