"""Testes do dispatcher das ações do webhook."""

from __future__ import annotations

from typing import get_args
from unittest.mock import AsyncMock

import pytest

from app.constants import OrderStatus, WebhookAction
from app.domain.commands import (
    CreateOrderCommand,
    CustomerInput,
    ProcedureInput,
    QueryOrderCommand,
    UpdateStatusCommand,
    WebhookCommand,
)
from app.infra.stores import MemoryWorkshopStore
from app.use_cases.webhook import WebhookActionDispatcher
from app.use_cases.webhook.dispatcher import GENERIC_ERROR_MESSAGE
from utils.errors import FirestoreUnavailableError


def _create_command() -> CreateOrderCommand:
    return CreateOrderCommand(
        cliente=CustomerInput(nome="João Silva", telefone="11999999999"),
        procedimento=ProcedureInput(descricao="Troca de óleo", valor=250),
    )


@pytest.mark.asyncio
async def test_dispatch_routes_each_action() -> None:
    store = MemoryWorkshopStore()
    dispatcher = WebhookActionDispatcher(store)

    created = await dispatcher.dispatch(_create_command())
    numero_os = created.data["numero_os"]
    updated = await dispatcher.dispatch(
        UpdateStatusCommand(numero_os=numero_os, status=OrderStatus.READY_FOR_PICKUP)
    )
    queried = await dispatcher.dispatch(QueryOrderCommand(numero_os=numero_os))

    assert created.success is True
    assert updated.data["status_novo"] == "pronto_retirada"
    assert queried.data["status"] == "pronto_retirada"


@pytest.mark.asyncio
async def test_business_error_becomes_outcome() -> None:
    outcome = await WebhookActionDispatcher(MemoryWorkshopStore()).dispatch(
        QueryOrderCommand(numero_os=12)
    )

    assert outcome.success is False
    assert outcome.data is None
    assert outcome.error == "Ordem de serviço #12 não encontrada"


@pytest.mark.asyncio
async def test_infrastructure_error_becomes_outcome() -> None:
    store = MemoryWorkshopStore()
    store.find_client_by_phone = AsyncMock(
        side_effect=FirestoreUnavailableError("find_client_by_phone")
    )

    outcome = await WebhookActionDispatcher(store).dispatch(_create_command())

    assert outcome.success is False
    assert outcome.error == "Falha no Firestore durante find_client_by_phone"


@pytest.mark.asyncio
async def test_exception_without_message_uses_generic_text() -> None:
    store = MemoryWorkshopStore()
    store.get_order_details = AsyncMock(side_effect=RuntimeError())

    outcome = await WebhookActionDispatcher(store).dispatch(QueryOrderCommand(numero_os=1))

    assert outcome.error == GENERIC_ERROR_MESSAGE


def test_command_union_has_one_variant_per_action() -> None:
    tags = {variant.model_fields["acao"].default for variant in get_args(WebhookCommand)}

    assert tags == {action.value for action in WebhookAction}
