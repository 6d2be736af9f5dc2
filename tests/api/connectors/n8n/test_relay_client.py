"""Testes do cliente de relay para o n8n com httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from api.connectors.n8n import RELAY_NOT_CONFIGURED, N8nRelayClient
from config.settings.relay import RelaySettings

_SETTINGS = RelaySettings(url="https://n8n.example.com/webhook/oficina", api_key="chave")


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_posts_payload_with_bearer() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"ok": True})

    async with _client(handler) as http_client:
        relay = N8nRelayClient(_SETTINGS, http_client)
        result = await relay.send({"acao": "criar_os", "sucesso": True})

    assert result.success is True
    assert result.status == 200
    assert result.error is None
    assert captured["url"] == _SETTINGS.url
    assert captured["auth"] == "Bearer chave"
    assert captured["body"] == {"acao": "criar_os", "sucesso": True}


@pytest.mark.asyncio
async def test_send_reports_http_error_status() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503)

    async with _client(handler) as http_client:
        result = await N8nRelayClient(_SETTINGS, http_client).send({"acao": "x"})

    assert result.success is False
    assert result.status == 503
    assert result.error == "HTTP 503"
    assert calls == 1  # sem retry
    assert result.as_response_dict() == {"enviado": False, "status": 503, "erro": "HTTP 503"}


@pytest.mark.asyncio
async def test_send_converts_network_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as http_client:
        result = await N8nRelayClient(_SETTINGS, http_client).send({"acao": "x"})

    assert result.success is False
    assert result.status is None
    assert result.error == "connection refused"


@pytest.mark.asyncio
async def test_send_without_url_skips_network() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("não deveria chamar a rede")

    async with _client(handler) as http_client:
        result = await N8nRelayClient(RelaySettings(), http_client).send({"acao": "x"})

    assert result.success is False
    assert result.status is None
    assert result.error == RELAY_NOT_CONFIGURED


@pytest.mark.asyncio
async def test_send_converts_malformed_url() -> None:
    settings = RelaySettings(url="http://[::1/hook", api_key="chave")

    result = await N8nRelayClient(settings).send({"acao": "x"})

    assert result.success is False
    assert result.status is None
    assert result.error
