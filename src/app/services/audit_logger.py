"""Registro de auditoria das chamadas ao webhook (best-effort)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.workshop import WebhookLogRecord
from app.services.payload_masking import mask_sensitive_data

if TYPE_CHECKING:
    from app.constants.workshop import AuditOutcome
    from app.protocols.audit_store import AuditStoreProtocol

logger = logging.getLogger(__name__)


class WebhookAuditLogger:
    """Grava um registro por chamada despachada.

    Falhas de gravação são logadas e descartadas; nunca alteram a
    resposta ao chamador.
    """

    def __init__(self, store: AuditStoreProtocol) -> None:
        self._store = store

    async def log(
        self,
        acao: str,
        payload: dict[str, Any],
        outcome: AuditOutcome,
        error_message: str | None = None,
        source_address: str | None = None,
    ) -> bool:
        try:
            record = WebhookLogRecord(
                acao=acao,
                payload=mask_sensitive_data(payload),
                status=outcome,
                erro_mensagem=error_message,
                ip_origem=source_address,
            )
            await self._store.append(record)
        except Exception as exc:
            logger.warning(
                "webhook_audit_write_failed",
                extra={"acao": acao, "error_type": type(exc).__name__},
            )
            return False
        return True

    async def recent(self, limit: int = 20) -> list[WebhookLogRecord]:
        return await self._store.list_recent(limit)
