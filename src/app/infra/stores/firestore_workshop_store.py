"""Firestore Workshop Store: clientes, veículos e ordens de serviço.

Cada entidade vive em sua própria collection com o `id` como document
ID. O `numero_os` sai de um contador transacional em `counters`.
O SDK do Firestore é síncrono; as chamadas rodam em asyncio.to_thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

from app.domain.workshop import (
    Client,
    HistoryEntry,
    Notification,
    OrderDetails,
    Procedure,
    ServiceOrder,
    Vehicle,
)
from config.settings import FirestoreSettings
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable

    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

ORDER_COUNTER_DOC = "ordens_servico"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class FirestoreWorkshopStore:
    """Store da oficina usando Firestore (implementa WorkshopStoreProtocol).

    Args:
        firestore_client: Cliente Firestore
        settings: Nomes das collections
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        settings: FirestoreSettings | None = None,
    ) -> None:
        self._db = firestore_client
        self._settings = settings or FirestoreSettings()

    async def _run(self, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except FirestoreUnavailableError:
            raise
        except Exception as exc:
            logger.error(
                "firestore_operation_failed",
                extra={"operation": operation, "error_type": type(exc).__name__},
            )
            raise FirestoreUnavailableError(operation) from exc

    # ──────────────────────────────────────────────────────────────
    # Helpers síncronos
    # ──────────────────────────────────────────────────────────────

    def _find_one_sync(
        self, collection: str, field: str, value: Any, model: type[_ModelT]
    ) -> _ModelT | None:
        from google.cloud.firestore import FieldFilter

        query = (
            self._db.collection(collection)
            .where(filter=FieldFilter(field, "==", value))
            .limit(1)
        )
        for doc in query.stream():
            return model.model_validate(doc.to_dict() or {})
        return None

    def _find_many_sync(
        self, collection: str, field: str, value: Any, model: type[_ModelT]
    ) -> list[_ModelT]:
        from google.cloud.firestore import FieldFilter

        query = self._db.collection(collection).where(filter=FieldFilter(field, "==", value))
        records = [model.model_validate(doc.to_dict() or {}) for doc in query.stream()]
        return sorted(records, key=lambda r: r.created_at)  # type: ignore[attr-defined]

    def _get_sync(self, collection: str, doc_id: str, model: type[_ModelT]) -> _ModelT | None:
        doc = self._db.collection(collection).document(doc_id).get()
        if not doc.exists:
            return None
        return model.model_validate(doc.to_dict() or {})

    def _set_sync(self, collection: str, record: Any) -> None:
        self._db.collection(collection).document(record.id).set(record.to_document())

    def _next_order_number_sync(self) -> int:
        from google.cloud import firestore

        counter_ref = self._db.collection(self._settings.collection_counters).document(
            ORDER_COUNTER_DOC
        )

        @firestore.transactional
        def _increment(transaction: Any) -> int:
            snapshot = counter_ref.get(transaction=transaction)
            current = int((snapshot.to_dict() or {}).get("value", 0)) if snapshot.exists else 0
            transaction.set(counter_ref, {"value": current + 1})
            return current + 1

        return _increment(self._db.transaction())

    def _create_order_sync(self, fields: dict[str, Any]) -> ServiceOrder:
        order = ServiceOrder(numero_os=self._next_order_number_sync(), **fields)
        self._set_sync(self._settings.collection_orders, order)
        return order

    def _update_order_sync(self, order_id: str, changes: dict[str, Any]) -> ServiceOrder:
        collection = self._settings.collection_orders
        current = self._get_sync(collection, order_id, ServiceOrder)
        if current is None:
            msg = f"OS {order_id} inexistente"
            raise KeyError(msg)
        updated = current.model_copy(update=changes)
        payload = {key: updated.to_document()[key] for key in changes}
        self._db.collection(collection).document(order_id).update(payload)
        return updated

    def _order_details_sync(self, numero_os: int) -> OrderDetails | None:
        s = self._settings
        order = self._find_one_sync(s.collection_orders, "numero_os", numero_os, ServiceOrder)
        if order is None:
            return None
        return OrderDetails(
            **order.model_dump(),
            cliente=self._get_sync(s.collection_clients, order.cliente_id, Client),
            veiculo=(
                self._get_sync(s.collection_vehicles, order.veiculo_id, Vehicle)
                if order.veiculo_id
                else None
            ),
            procedimentos=self._find_many_sync(
                s.collection_procedures, "ordem_servico_id", order.id, Procedure
            ),
            historico=self._find_many_sync(
                s.collection_history, "ordem_servico_id", order.id, HistoryEntry
            ),
            notificacoes=self._find_many_sync(
                s.collection_notifications, "ordem_servico_id", order.id, Notification
            ),
        )

    # ──────────────────────────────────────────────────────────────
    # API assíncrona (WorkshopStoreProtocol)
    # ──────────────────────────────────────────────────────────────

    async def find_client_by_phone(self, telefone: str) -> Client | None:
        return await self._run(
            "find_client_by_phone",
            self._find_one_sync,
            self._settings.collection_clients,
            "telefone",
            telefone,
            Client,
        )

    async def create_client(
        self,
        *,
        nome: str,
        telefone: str,
        email: str | None = None,
        cpf_cnpj: str | None = None,
    ) -> Client:
        client = Client(nome=nome, telefone=telefone, email=email, cpf_cnpj=cpf_cnpj)
        await self._run("create_client", self._set_sync, self._settings.collection_clients, client)
        return client

    async def find_vehicle_by_plate(self, placa: str) -> Vehicle | None:
        return await self._run(
            "find_vehicle_by_plate",
            self._find_one_sync,
            self._settings.collection_vehicles,
            "placa",
            placa,
            Vehicle,
        )

    async def create_vehicle(
        self,
        *,
        cliente_id: str,
        placa: str,
        marca: str,
        modelo: str,
        ano: int | None = None,
        cor: str | None = None,
    ) -> Vehicle:
        vehicle = Vehicle(
            cliente_id=cliente_id, placa=placa, marca=marca, modelo=modelo, ano=ano, cor=cor
        )
        await self._run(
            "create_vehicle", self._set_sync, self._settings.collection_vehicles, vehicle
        )
        return vehicle

    async def create_order(self, **fields: Any) -> ServiceOrder:
        return await self._run("create_order", self._create_order_sync, fields)

    async def create_procedure(self, **fields: Any) -> Procedure:
        procedure = Procedure(**fields)
        await self._run(
            "create_procedure", self._set_sync, self._settings.collection_procedures, procedure
        )
        return procedure

    async def find_order_by_number(self, numero_os: int) -> ServiceOrder | None:
        return await self._run(
            "find_order_by_number",
            self._find_one_sync,
            self._settings.collection_orders,
            "numero_os",
            numero_os,
            ServiceOrder,
        )

    async def update_order(self, order_id: str, changes: dict[str, Any]) -> ServiceOrder:
        return await self._run("update_order", self._update_order_sync, order_id, changes)

    async def add_history_entry(self, **fields: Any) -> HistoryEntry:
        entry = HistoryEntry(**fields)
        await self._run(
            "add_history_entry", self._set_sync, self._settings.collection_history, entry
        )
        return entry

    async def get_order_details(self, numero_os: int) -> OrderDetails | None:
        return await self._run("get_order_details", self._order_details_sync, numero_os)
