"""Firestore Audit Store: log das chamadas ao webhook.

Append-only: cada chamada processada gera um documento novo na
collection `webhook_logs`. O payload já chega mascarado.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.domain.workshop import WebhookLogRecord
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

WEBHOOK_LOGS_COLLECTION = "webhook_logs"


class FirestoreAuditStore:
    """Store de auditoria usando Firestore (implementa AuditStoreProtocol).

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: webhook_logs)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = WEBHOOK_LOGS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def _append_sync(self, record: WebhookLogRecord) -> None:
        try:
            self._db.collection(self._collection).document(record.id).set(record.to_document())
        except Exception as exc:
            raise FirestoreUnavailableError("append webhook_log") from exc
        logger.debug(
            "webhook_log_appended",
            extra={"doc_id": record.id, "acao": record.acao, "status": record.status.value},
        )

    async def append(self, record: WebhookLogRecord) -> None:
        """Grava o registro sem bloquear o event loop (SDK é síncrono)."""
        await asyncio.to_thread(self._append_sync, record)

    def _list_recent_sync(self, limit: int) -> list[WebhookLogRecord]:
        from google.cloud.firestore import Query

        try:
            docs = (
                self._db.collection(self._collection)
                .order_by("created_at", direction=Query.DESCENDING)
                .limit(limit)
                .stream()
            )
            return [WebhookLogRecord.model_validate(doc.to_dict() or {}) for doc in docs]
        except Exception as exc:
            raise FirestoreUnavailableError("list webhook_logs") from exc

    async def list_recent(self, limit: int = 20) -> list[WebhookLogRecord]:
        return await asyncio.to_thread(self._list_recent_sync, limit)
