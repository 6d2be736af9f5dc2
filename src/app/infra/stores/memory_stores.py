"""Stores em memória: desenvolvimento, testes e instância única.

ATENÇÃO: sem persistência entre reinícios e sem coordenação entre
processos. Em staging/production use Firestore e Redis.
"""

from __future__ import annotations

import itertools
import random
from collections.abc import Callable
from typing import Any

from app.domain.workshop import (
    Client,
    HistoryEntry,
    Notification,
    OrderDetails,
    Procedure,
    ServiceOrder,
    Vehicle,
    WebhookLogRecord,
)
from app.protocols.rate_limit_store import RateLimitStoreProtocol


class MemoryWorkshopStore:
    """Store da oficina em dicionários (implementa WorkshopStoreProtocol)."""

    def __init__(self, first_order_number: int = 1) -> None:
        self.clients: dict[str, Client] = {}
        self.vehicles: dict[str, Vehicle] = {}
        self.orders: dict[str, ServiceOrder] = {}
        self.procedures: dict[str, Procedure] = {}
        self.history: dict[str, HistoryEntry] = {}
        self.notifications: dict[str, Notification] = {}
        self._order_numbers = itertools.count(first_order_number)

    async def find_client_by_phone(self, telefone: str) -> Client | None:
        return next((c for c in self.clients.values() if c.telefone == telefone), None)

    async def create_client(
        self,
        *,
        nome: str,
        telefone: str,
        email: str | None = None,
        cpf_cnpj: str | None = None,
    ) -> Client:
        client = Client(nome=nome, telefone=telefone, email=email, cpf_cnpj=cpf_cnpj)
        self.clients[client.id] = client
        return client

    async def find_vehicle_by_plate(self, placa: str) -> Vehicle | None:
        return next((v for v in self.vehicles.values() if v.placa == placa), None)

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
        self.vehicles[vehicle.id] = vehicle
        return vehicle

    async def create_order(self, **fields: Any) -> ServiceOrder:
        order = ServiceOrder(numero_os=next(self._order_numbers), **fields)
        self.orders[order.id] = order
        return order

    async def create_procedure(self, **fields: Any) -> Procedure:
        procedure = Procedure(**fields)
        self.procedures[procedure.id] = procedure
        return procedure

    async def find_order_by_number(self, numero_os: int) -> ServiceOrder | None:
        return next((o for o in self.orders.values() if o.numero_os == numero_os), None)

    async def update_order(self, order_id: str, changes: dict[str, Any]) -> ServiceOrder:
        current = self.orders.get(order_id)
        if current is None:
            msg = f"OS {order_id} inexistente"
            raise KeyError(msg)
        updated = current.model_copy(update=changes)
        self.orders[order_id] = updated
        return updated

    async def add_history_entry(self, **fields: Any) -> HistoryEntry:
        entry = HistoryEntry(**fields)
        self.history[entry.id] = entry
        return entry

    def add_notification(self, notification: Notification) -> None:
        """Registra notificação (enviadas fora deste serviço)."""
        self.notifications[notification.id] = notification

    async def get_order_details(self, numero_os: int) -> OrderDetails | None:
        order = await self.find_order_by_number(numero_os)
        if order is None:
            return None
        return OrderDetails(
            **order.model_dump(),
            cliente=self.clients.get(order.cliente_id),
            veiculo=self.vehicles.get(order.veiculo_id) if order.veiculo_id else None,
            procedimentos=_owned_by(self.procedures, order.id),
            historico=_owned_by(self.history, order.id),
            notificacoes=_owned_by(self.notifications, order.id),
        )


def _owned_by(records: dict[str, Any], order_id: str) -> list[Any]:
    owned = [r for r in records.values() if r.ordem_servico_id == order_id]
    return sorted(owned, key=lambda r: r.created_at)


class MemoryAuditStore:
    """Store de auditoria em memória (implementa AuditStoreProtocol)."""

    def __init__(self, max_records: int = 10000) -> None:
        self._records: list[WebhookLogRecord] = []
        self._max_records = max_records

    async def append(self, record: WebhookLogRecord) -> None:
        self._records.append(record)
        if len(self._records) > self._max_records:
            self._records = self._records[-self._max_records:]

    async def list_recent(self, limit: int = 20) -> list[WebhookLogRecord]:
        return list(reversed(self._records[-limit:])) if limit > 0 else []

    def get_records(self) -> list[WebhookLogRecord]:
        """Todos os registros em ordem de gravação (apenas para testes)."""
        return list(self._records)


class MemoryRateLimitStore(RateLimitStoreProtocol):
    """Contadores de janela fixa em memória de processo.

    Uma varredura oportunista (probabilidade `cleanup_probability` por
    chamada) remove janelas vencidas para limitar o uso de memória.
    """

    def __init__(
        self,
        cleanup_probability: float = 0.01,
        random_source: Callable[[], float] = random.random,
    ) -> None:
        self._windows: dict[str, tuple[int, float]] = {}  # key -> (count, reset_at)
        self._cleanup_probability = cleanup_probability
        self._random = random_source

    def __len__(self) -> int:
        return len(self._windows)

    def _cleanup_expired(self, now: float) -> None:
        expired = [k for k, (_, reset_at) in self._windows.items() if now >= reset_at]
        for k in expired:
            del self._windows[k]

    async def hit(self, key: str, window_seconds: int, now: float) -> tuple[int, float]:
        if self._random() < self._cleanup_probability:
            self._cleanup_expired(now)

        entry = self._windows.get(key)
        if entry is None or now >= entry[1]:
            reset_at = now + window_seconds
            self._windows[key] = (1, reset_at)
            return 1, reset_at

        count, reset_at = entry
        count += 1
        self._windows[key] = (count, reset_at)
        return count, reset_at
