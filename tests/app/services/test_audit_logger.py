"""Testes do audit logger do webhook."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from app.constants import AuditOutcome
from app.infra.stores import MemoryAuditStore
from app.services.audit_logger import WebhookAuditLogger
from utils.errors import FirestoreUnavailableError


@pytest.mark.asyncio
async def test_log_writes_masked_record() -> None:
    store = MemoryAuditStore()
    audit = WebhookAuditLogger(store)

    written = await audit.log(
        "criar_os",
        {"acao": "criar_os", "cliente": {"cpf_cnpj": "12345678909"}},
        AuditOutcome.SUCCESS,
        source_address="203.0.113.7",
    )

    assert written is True
    [record] = store.get_records()
    assert record.acao == "criar_os"
    assert record.status == AuditOutcome.SUCCESS
    assert record.payload["cliente"]["cpf_cnpj"] == "12...09"
    assert record.ip_origem == "203.0.113.7"
    assert record.erro_mensagem is None


@pytest.mark.asyncio
async def test_log_swallows_store_failure() -> None:
    store = AsyncMock()
    store.append.side_effect = FirestoreUnavailableError("append")

    written = await WebhookAuditLogger(store).log(
        "consultar_os", {}, AuditOutcome.ERROR, "Ordem de serviço #1 não encontrada"
    )

    assert written is False
    store.append.assert_awaited_once()


@pytest.mark.asyncio
async def test_recent_returns_newest_first() -> None:
    store = MemoryAuditStore()
    audit = WebhookAuditLogger(store)
    for acao in ("criar_os", "atualizar_status", "consultar_os"):
        await audit.log(acao, {}, AuditOutcome.SUCCESS)

    recent = await audit.recent(2)

    assert [r.acao for r in recent] == ["consultar_os", "atualizar_status"]
