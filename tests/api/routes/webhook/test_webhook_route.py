"""Testes dos endpoints da rota do webhook de automação."""

from __future__ import annotations

import importlib
import json
from typing import TYPE_CHECKING

import pytest
from starlette.requests import Request

from api.routes.webhook import runtime
from api.routes.webhook.router import (
    receive_webhook,
    recent_webhook_logs,
    webhook_health,
    webhook_preflight,
)
from config.settings.webhook import WebhookSettings

if TYPE_CHECKING:
    from conftest import GatewayHarness

webhook_router_module = importlib.import_module("api.routes.webhook.router")

APP_URL = "https://oficina.example.com"


def _build_request(
    *,
    method: str,
    path: str = "/api/webhook",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": b"",
        "headers": raw_headers,
        "client": ("10.0.0.9", 50000),
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


@pytest.fixture
def wired(monkeypatch: pytest.MonkeyPatch, harness: GatewayHarness) -> GatewayHarness:
    monkeypatch.setattr(runtime, "get_webhook_gateway", lambda: harness.gateway)
    monkeypatch.setattr(
        webhook_router_module,
        "get_webhook_settings",
        lambda: WebhookSettings(secret=harness.secret, app_url=APP_URL),
    )
    return harness


def _assert_hardened(response) -> None:
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["x-xss-protection"] == "1; mode=block"
    assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"
    assert response.headers["access-control-allow-origin"] == APP_URL
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"


@pytest.mark.asyncio
async def test_post_create_order(wired: GatewayHarness) -> None:
    payload = {
        "acao": "criar_os",
        "cliente": {"nome": "João Silva", "telefone": "11999999999", "placa": "ABC1D23"},
        "procedimento": {"descricao": "Troca de óleo", "valor": 250},
    }
    request = _build_request(
        method="POST",
        body=json.dumps(payload).encode("utf-8"),
        headers={
            "Authorization": f"Bearer {wired.secret}",
            "Content-Type": "application/json",
            "X-Correlation-Id": "corr-123",
        },
    )

    response = await receive_webhook(request)
    body = json.loads(response.body)

    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["numero_os"] > 0
    assert body["data"]["status"] == "pendente"
    assert response.headers["x-correlation-id"] == "corr-123"
    _assert_hardened(response)
    [record] = wired.audit.get_records()
    assert record.ip_origem == "10.0.0.9"


@pytest.mark.asyncio
async def test_post_unauthorized_still_hardened(wired: GatewayHarness) -> None:
    request = _build_request(method="POST", body=b'{"acao": "consultar_os"}')

    response = await receive_webhook(request)

    assert response.status_code == 401
    assert json.loads(response.body) == {"success": False, "error": "Unauthorized"}
    _assert_hardened(response)


@pytest.mark.asyncio
async def test_get_returns_static_health(wired: GatewayHarness) -> None:
    response = await webhook_health()
    body = json.loads(response.body)

    assert response.status_code == 200
    assert body["status"] == "ok"
    assert body["message"] == "Webhook API is running"
    assert "timestamp" in body
    _assert_hardened(response)


@pytest.mark.asyncio
async def test_options_preflight(wired: GatewayHarness) -> None:
    response = await webhook_preflight()

    assert response.status_code == 204
    assert response.body == b""
    assert response.headers["access-control-max-age"] == "86400"
    _assert_hardened(response)


@pytest.mark.asyncio
async def test_logs_requires_auth(wired: GatewayHarness) -> None:
    request = _build_request(method="GET", path="/api/webhook/logs")

    response = await recent_webhook_logs(request, limit=20)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logs_lists_recent_records(wired: GatewayHarness) -> None:
    post = _build_request(
        method="POST",
        body=b'{"acao": "consultar_os", "numero_os": 9}',
        headers={"Authorization": wired.secret},
    )
    await receive_webhook(post)
    request = _build_request(
        method="GET",
        path="/api/webhook/logs",
        headers={"Authorization": f"Bearer {wired.secret}"},
    )

    response = await recent_webhook_logs(request, limit=20)
    body = json.loads(response.body)

    assert response.status_code == 200
    assert body["success"] is True
    [record] = body["data"]
    assert record["acao"] == "consultar_os"
    assert record["status"] == "erro"
    assert record["erro_mensagem"] == "Ordem de serviço #9 não encontrada"


def test_runtime_builds_gateway_lazily(monkeypatch: pytest.MonkeyPatch) -> None:
    sentinel = object()
    calls: list[int] = []

    def _build() -> object:
        calls.append(1)
        return sentinel

    runtime.reset_webhook_gateway()
    monkeypatch.setattr(runtime, "build_webhook_gateway", _build)
    try:
        assert runtime.get_webhook_gateway() is sentinel
        assert runtime.get_webhook_gateway() is sentinel
        assert calls == [1]
    finally:
        runtime.reset_webhook_gateway()
