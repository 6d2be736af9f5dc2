"""Use case `criar_os`: cliente e veículo por lookup-or-insert, OS e procedimento.

Sem transação cobrindo a sequência: duas chamadas concorrentes com o
mesmo telefone/placa podem criar registros duplicados, e uma falha no
meio deixa os inserts anteriores gravados.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.constants import OrderStatus, ProcedureStatus

if TYPE_CHECKING:
    from app.domain.commands import CreateOrderCommand, CustomerInput
    from app.domain.workshop import Client
    from app.protocols.workshop_store import WorkshopStoreProtocol

logger = logging.getLogger(__name__)

UNKNOWN_VEHICLE_LABEL = "Não informado"


def split_car_description(
    carro: str | None,
    marca: str | None = None,
    modelo: str | None = None,
) -> tuple[str, str]:
    """Resolve (marca, modelo) a partir dos campos explícitos ou de `carro`.

    `"Honda Civic EXL"` -> `("Honda", "Civic EXL")`. Campos explícitos têm
    precedência; sem nenhum dado, usa o rótulo "Não informado".
    """
    tokens = (carro or "").split(maxsplit=1)
    derived_brand = tokens[0] if tokens else ""
    derived_model = tokens[1] if len(tokens) > 1 else ""
    return (
        marca or derived_brand or UNKNOWN_VEHICLE_LABEL,
        modelo or derived_model or UNKNOWN_VEHICLE_LABEL,
    )


class CreateOrderUseCase:
    def __init__(self, store: WorkshopStoreProtocol) -> None:
        self._store = store

    async def execute(self, command: CreateOrderCommand) -> dict[str, Any]:
        customer = command.cliente
        procedure = command.procedimento

        client = await self._resolve_client(customer)
        vehicle_id = await self._resolve_vehicle_id(customer, client)

        valor = procedure.valor or 0
        order = await self._store.create_order(
            cliente_id=client.id,
            veiculo_id=vehicle_id,
            descricao=procedure.descricao,
            observacoes=procedure.observacoes,
            valor_total=valor,
            status=OrderStatus.PENDING,
        )
        await self._store.create_procedure(
            ordem_servico_id=order.id,
            descricao=procedure.descricao,
            valor=valor,
            status=ProcedureStatus.PENDING,
        )

        logger.info(
            "webhook_order_created",
            extra={"numero_os": order.numero_os, "has_vehicle": vehicle_id is not None},
        )
        return {
            "ordem_servico_id": order.id,
            "numero_os": order.numero_os,
            "cliente_id": client.id,
            "veiculo_id": vehicle_id,
            "status": order.status.value,
        }

    async def _resolve_client(self, customer: CustomerInput) -> Client:
        existing = await self._store.find_client_by_phone(customer.telefone)
        if existing is not None:
            return existing
        return await self._store.create_client(
            nome=customer.nome,
            telefone=customer.telefone,
            email=customer.email,
            cpf_cnpj=customer.cpf_cnpj,
        )

    async def _resolve_vehicle_id(self, customer: CustomerInput, client: Client) -> str | None:
        if not customer.placa:
            return None

        existing = await self._store.find_vehicle_by_plate(customer.placa)
        if existing is not None:
            return existing.id

        marca, modelo = split_car_description(customer.carro, customer.marca, customer.modelo)
        vehicle = await self._store.create_vehicle(
            cliente_id=client.id,
            placa=customer.placa,
            marca=marca,
            modelo=modelo,
            ano=customer.ano,
            cor=customer.cor,
        )
        return vehicle.id
