"""Constantes e enums de domínio."""

from app.constants.workshop import (
    WEBHOOK_ACTOR,
    AuditOutcome,
    NotificationChannel,
    NotificationStatus,
    OrderStatus,
    ProcedureStatus,
    WebhookAction,
)

__all__ = [
    "WEBHOOK_ACTOR",
    "AuditOutcome",
    "NotificationChannel",
    "NotificationStatus",
    "OrderStatus",
    "ProcedureStatus",
    "WebhookAction",
]
