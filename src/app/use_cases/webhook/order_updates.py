"""Use cases que alteram uma OS existente: `atualizar_status` e `registrar_foto`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.constants import WEBHOOK_ACTOR
from app.use_cases.webhook.errors import OrderNotFoundError

if TYPE_CHECKING:
    from app.domain.commands import RegisterPhotoCommand, UpdateStatusCommand
    from app.domain.workshop import ServiceOrder
    from app.protocols.workshop_store import WorkshopStoreProtocol


async def _require_order(store: WorkshopStoreProtocol, numero_os: int) -> ServiceOrder:
    order = await store.find_order_by_number(numero_os)
    if order is None:
        raise OrderNotFoundError(numero_os)
    return order


class UpdateStatusUseCase:
    """Troca o status sem restrição de transição.

    Histórico só é gravado quando há observação.
    """

    def __init__(self, store: WorkshopStoreProtocol, actor: str = WEBHOOK_ACTOR) -> None:
        self._store = store
        self._actor = actor

    async def execute(self, command: UpdateStatusCommand) -> dict[str, Any]:
        order = await _require_order(self._store, command.numero_os)
        previous = order.status

        await self._store.update_order(order.id, {"status": command.status})

        if command.observacao:
            await self._store.add_history_entry(
                ordem_servico_id=order.id,
                status_anterior=previous,
                status_novo=command.status,
                observacao=command.observacao,
                usuario=self._actor,
            )

        return {
            "ordem_servico_id": order.id,
            "numero_os": order.numero_os,
            "status_anterior": previous.value,
            "status_novo": command.status.value,
        }


class RegisterPhotoUseCase:
    """Anexa a URL à lista de fotos (read-modify-write, last-writer-wins)."""

    def __init__(self, store: WorkshopStoreProtocol) -> None:
        self._store = store

    async def execute(self, command: RegisterPhotoCommand) -> dict[str, Any]:
        order = await _require_order(self._store, command.numero_os)
        fotos = [*order.fotos, command.foto_url]
        await self._store.update_order(order.id, {"fotos": fotos})
        return {
            "ordem_servico_id": order.id,
            "numero_os": order.numero_os,
            "total_fotos": len(fotos),
        }
