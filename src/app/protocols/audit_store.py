"""Protocolo do store de auditoria do webhook (append-only)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.workshop import WebhookLogRecord


class AuditStoreProtocol(Protocol):
    """Contrato para persistir e listar registros de chamadas do webhook."""

    async def append(self, record: WebhookLogRecord) -> None:
        """Grava um registro. Pode levantar em falha de backend."""
        ...

    async def list_recent(self, limit: int = 20) -> list[WebhookLogRecord]:
        """Registros mais recentes primeiro."""
        ...
