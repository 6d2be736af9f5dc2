"""Use case `consultar_os`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.use_cases.webhook.errors import OrderNotFoundError

if TYPE_CHECKING:
    from app.domain.commands import QueryOrderCommand
    from app.protocols.workshop_store import WorkshopStoreProtocol


class QueryOrderUseCase:
    def __init__(self, store: WorkshopStoreProtocol) -> None:
        self._store = store

    async def execute(self, command: QueryOrderCommand) -> dict[str, Any]:
        details = await self._store.get_order_details(command.numero_os)
        if details is None:
            raise OrderNotFoundError(command.numero_os)
        return details.to_document()
