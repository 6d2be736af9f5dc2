"""Testes dos use cases atualizar_status, registrar_foto e consultar_os."""

from __future__ import annotations

import pytest

from app.constants import OrderStatus
from app.domain.commands import (
    QueryOrderCommand,
    RegisterPhotoCommand,
    UpdateStatusCommand,
)
from app.domain.workshop import ServiceOrder
from app.infra.stores import MemoryWorkshopStore
from app.use_cases.webhook import (
    OrderNotFoundError,
    QueryOrderUseCase,
    RegisterPhotoUseCase,
    UpdateStatusUseCase,
)


async def _store_with_order(status: OrderStatus = OrderStatus.PENDING) -> tuple[
    MemoryWorkshopStore, ServiceOrder
]:
    store = MemoryWorkshopStore()
    client = await store.create_client(nome="Ana", telefone="11999990000")
    order = await store.create_order(
        cliente_id=client.id,
        veiculo_id=None,
        descricao="Revisão",
        observacoes=None,
        valor_total=100,
        status=status,
    )
    return store, order


class TestUpdateStatus:
    @pytest.mark.asyncio
    async def test_with_note_appends_one_history_entry(self) -> None:
        store, order = await _store_with_order()

        result = await UpdateStatusUseCase(store).execute(
            UpdateStatusCommand(
                numero_os=order.numero_os,
                status=OrderStatus.AWAITING_PARTS,
                observacao="Aguardando pastilhas",
            )
        )

        assert result == {
            "ordem_servico_id": order.id,
            "numero_os": order.numero_os,
            "status_anterior": "pendente",
            "status_novo": "aguardando_pecas",
        }
        assert store.orders[order.id].status == OrderStatus.AWAITING_PARTS
        [entry] = store.history.values()
        assert entry.status_anterior == OrderStatus.PENDING
        assert entry.status_novo == OrderStatus.AWAITING_PARTS
        assert entry.observacao == "Aguardando pastilhas"
        assert entry.usuario == "webhook"

    @pytest.mark.asyncio
    async def test_without_note_appends_no_history(self) -> None:
        store, order = await _store_with_order()

        await UpdateStatusUseCase(store).execute(
            UpdateStatusCommand(numero_os=order.numero_os, status=OrderStatus.IN_PROGRESS)
        )

        assert store.orders[order.id].status == OrderStatus.IN_PROGRESS
        assert store.history == {}

    @pytest.mark.asyncio
    async def test_any_transition_is_allowed(self) -> None:
        store, order = await _store_with_order(OrderStatus.DONE)

        result = await UpdateStatusUseCase(store).execute(
            UpdateStatusCommand(numero_os=order.numero_os, status=OrderStatus.PENDING)
        )

        assert result["status_anterior"] == "finalizado"
        assert result["status_novo"] == "pendente"

    @pytest.mark.asyncio
    async def test_unknown_order_raises_without_mutation(self) -> None:
        store, order = await _store_with_order()
        snapshot = dict(store.orders)

        with pytest.raises(OrderNotFoundError, match="Ordem de serviço #404 não encontrada"):
            await UpdateStatusUseCase(store).execute(
                UpdateStatusCommand(numero_os=404, status=OrderStatus.DONE, observacao="x")
            )

        assert store.orders == snapshot
        assert store.history == {}


class TestRegisterPhoto:
    @pytest.mark.asyncio
    async def test_appends_exactly_one_url(self) -> None:
        store, order = await _store_with_order()
        use_case = RegisterPhotoUseCase(store)
        await use_case.execute(
            RegisterPhotoCommand(numero_os=order.numero_os, foto_url="https://cdn/1.jpg")
        )
        prior = len(store.orders[order.id].fotos)

        result = await use_case.execute(
            RegisterPhotoCommand(numero_os=order.numero_os, foto_url="https://cdn/2.jpg")
        )

        assert result["total_fotos"] == prior + 1
        assert store.orders[order.id].fotos == ["https://cdn/1.jpg", "https://cdn/2.jpg"]

    @pytest.mark.asyncio
    async def test_unknown_order(self) -> None:
        store, _ = await _store_with_order()

        with pytest.raises(OrderNotFoundError):
            await RegisterPhotoUseCase(store).execute(
                RegisterPhotoCommand(numero_os=99, foto_url="https://cdn/1.jpg")
            )


class TestQueryOrder:
    @pytest.mark.asyncio
    async def test_returns_aggregate(self) -> None:
        store, order = await _store_with_order()

        data = await QueryOrderUseCase(store).execute(QueryOrderCommand(numero_os=order.numero_os))

        assert data["numero_os"] == order.numero_os
        assert data["status"] == "pendente"
        assert data["cliente"]["nome"] == "Ana"
        assert data["veiculo"] is None
        assert data["procedimentos"] == []
        assert data["historico"] == []
        assert data["notificacoes"] == []

    @pytest.mark.asyncio
    async def test_unknown_order(self) -> None:
        store = MemoryWorkshopStore()

        with pytest.raises(OrderNotFoundError) as exc_info:
            await QueryOrderUseCase(store).execute(QueryOrderCommand(numero_os=3))

        assert exc_info.value.numero_os == 3
