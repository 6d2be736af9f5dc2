"""Notificação de mudança de status feita fora do webhook (interface web).

POST /api/orders/notify-status-change converte a mudança em um comando
`atualizar_status` com observação e o executa pelo mesmo dispatcher do
webhook, com auditoria e relay para o n8n.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.webhook import resolve_client_address
from api.routes.webhook import runtime
from api.routes.webhook.gateway import INVALID_JSON_MESSAGE, UNAUTHORIZED_MESSAGE
from api.routes.webhook.headers import webhook_response_headers
from api.validators.webhook import fields
from app.constants import OrderStatus, WebhookAction
from app.domain.commands import UpdateStatusCommand
from app.observability import correlation_scope
from config.settings import get_webhook_settings

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_FIELDS_MESSAGE = "Missing required fields"


def status_change_note(previous: Any, new: str) -> str:
    return f"Status alterado de {previous} para {new} via interface web"


def _headers() -> dict[str, str]:
    return webhook_response_headers(get_webhook_settings().cors_origin)


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "error": message},
        status_code=status.HTTP_400_BAD_REQUEST,
        headers=_headers(),
    )


@router.post("/notify-status-change")
async def notify_status_change(request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get("x-correlation-id")):
        gateway = runtime.get_webhook_gateway()
        headers = dict(request.headers)
        if not gateway.is_authorized(headers):
            logger.warning("status_change_unauthorized")
            return JSONResponse(
                content={"success": False, "error": UNAUTHORIZED_MESSAGE},
                status_code=status.HTTP_401_UNAUTHORIZED,
                headers=_headers(),
            )

        try:
            body = json.loads(await request.body() or b"null")
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _bad_request(INVALID_JSON_MESSAGE)
        if not isinstance(body, dict):
            return _bad_request(INVALID_JSON_MESSAGE)

        numero_os = fields.parse_order_number(body.get("numero_os"))
        status_novo = body.get("status_novo")
        if numero_os is None or not fields.is_valid_status(status_novo):
            return _bad_request(MISSING_FIELDS_MESSAGE)

        command = UpdateStatusCommand(
            numero_os=numero_os,
            status=OrderStatus(status_novo),
            observacao=status_change_note(body.get("status_anterior"), status_novo),
        )
        payload = {
            "acao": WebhookAction.UPDATE_STATUS.value,
            "numero_os": numero_os,
            "status": command.status.value,
            "observacao": command.observacao,
        }
        source = resolve_client_address(
            headers, request.client.host if request.client else None
        )
        result = await gateway.run_command(command, payload, source)
        return JSONResponse(
            content=result.body, status_code=result.status_code, headers=_headers()
        )
