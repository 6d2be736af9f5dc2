"""Dispatcher das ações do webhook.

Executa exatamente um use case por comando. Qualquer exceção vira um
`ActionOutcome` com mensagem; quem chama decide a resposta HTTP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, assert_never

from app.domain.commands import (
    CreateOrderCommand,
    QueryOrderCommand,
    RegisterPhotoCommand,
    UpdateStatusCommand,
)
from app.use_cases.webhook.create_order import CreateOrderUseCase
from app.use_cases.webhook.errors import ActionError
from app.use_cases.webhook.order_updates import RegisterPhotoUseCase, UpdateStatusUseCase
from app.use_cases.webhook.query_order import QueryOrderUseCase

if TYPE_CHECKING:
    from app.domain.commands import WebhookCommand
    from app.protocols.workshop_store import WorkshopStoreProtocol

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Erro interno ao processar ação"


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None


class WebhookActionDispatcher:
    """Roteia o comando para o use case da ação correspondente."""

    def __init__(self, store: WorkshopStoreProtocol) -> None:
        self._create_order = CreateOrderUseCase(store)
        self._update_status = UpdateStatusUseCase(store)
        self._register_photo = RegisterPhotoUseCase(store)
        self._query_order = QueryOrderUseCase(store)

    async def _execute(self, command: WebhookCommand) -> dict[str, Any]:
        if isinstance(command, CreateOrderCommand):
            return await self._create_order.execute(command)
        if isinstance(command, UpdateStatusCommand):
            return await self._update_status.execute(command)
        if isinstance(command, RegisterPhotoCommand):
            return await self._register_photo.execute(command)
        if isinstance(command, QueryOrderCommand):
            return await self._query_order.execute(command)
        assert_never(command)

    async def dispatch(self, command: WebhookCommand) -> ActionOutcome:
        try:
            data = await self._execute(command)
        except ActionError as exc:
            logger.info(
                "webhook_action_rejected",
                extra={"acao": command.acao, "error_type": type(exc).__name__},
            )
            return ActionOutcome(success=False, error=str(exc))
        except Exception as exc:
            logger.exception(
                "webhook_action_failed",
                extra={"acao": command.acao, "error_type": type(exc).__name__},
            )
            return ActionOutcome(success=False, error=str(exc) or GENERIC_ERROR_MESSAGE)
        return ActionOutcome(success=True, data=data)
