"""Protocolo do store de registros da oficina.

Lookups e inserts são operações independentes: o store não oferece
transação cobrindo a sequência cliente → veículo → OS → procedimento.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.constants import OrderStatus, ProcedureStatus
    from app.domain.workshop import (
        Client,
        HistoryEntry,
        OrderDetails,
        Procedure,
        ServiceOrder,
        Vehicle,
    )


class WorkshopStoreProtocol(Protocol):
    """Contrato assíncrono de leitura/escrita de clientes, veículos e OS."""

    async def find_client_by_phone(self, telefone: str) -> Client | None:
        """Busca cliente pelo telefone normalizado (apenas dígitos)."""
        ...

    async def create_client(
        self,
        *,
        nome: str,
        telefone: str,
        email: str | None = None,
        cpf_cnpj: str | None = None,
    ) -> Client: ...

    async def find_vehicle_by_plate(self, placa: str) -> Vehicle | None:
        """Busca veículo pela placa normalizada."""
        ...

    async def create_vehicle(
        self,
        *,
        cliente_id: str,
        placa: str,
        marca: str,
        modelo: str,
        ano: int | None = None,
        cor: str | None = None,
    ) -> Vehicle: ...

    async def create_order(
        self,
        *,
        cliente_id: str,
        veiculo_id: str | None,
        descricao: str,
        observacoes: str | None,
        valor_total: float,
        status: OrderStatus,
    ) -> ServiceOrder:
        """Cria OS atribuindo o próximo `numero_os` sequencial."""
        ...

    async def create_procedure(
        self,
        *,
        ordem_servico_id: str,
        descricao: str,
        valor: float,
        status: ProcedureStatus,
    ) -> Procedure: ...

    async def find_order_by_number(self, numero_os: int) -> ServiceOrder | None: ...

    async def update_order(self, order_id: str, changes: dict[str, Any]) -> ServiceOrder:
        """Aplica `changes` à OS e retorna a versão atualizada."""
        ...

    async def add_history_entry(
        self,
        *,
        ordem_servico_id: str,
        status_anterior: OrderStatus | None,
        status_novo: OrderStatus,
        observacao: str | None,
        usuario: str,
    ) -> HistoryEntry: ...

    async def get_order_details(self, numero_os: int) -> OrderDetails | None:
        """Lê a OS com cliente, veículo, procedimentos, histórico e notificações."""
        ...
