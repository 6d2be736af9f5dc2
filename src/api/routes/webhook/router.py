"""Endpoints do webhook de automação (n8n).

Endpoints:
- POST /api/webhook: executa uma ação (criar_os, atualizar_status,
  registrar_foto, consultar_os)
- GET /api/webhook: health estático
- OPTIONS /api/webhook: preflight CORS
- GET /api/webhook/logs: chamadas recentes (autenticado)

Toda resposta leva headers de segurança e CORS.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Query, Request, Response, status
from fastapi.responses import JSONResponse

from api.routes.webhook import runtime
from api.routes.webhook.gateway import UNAUTHORIZED_MESSAGE, GatewayRequest
from api.routes.webhook.headers import webhook_response_headers
from app.observability import correlation_scope
from config.settings import get_webhook_settings

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_LOGS_LIMIT = 20
MAX_LOGS_LIMIT = 100


def _headers() -> dict[str, str]:
    return webhook_response_headers(get_webhook_settings().cors_origin)


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> JSONResponse:
    """Recebe uma chamada de automação e responde com o resultado da ação."""
    with correlation_scope(request.headers.get("x-correlation-id")) as correlation_id:
        raw_body = await request.body()
        gateway_request = GatewayRequest(
            headers=dict(request.headers),
            body=raw_body,
            peer_host=request.client.host if request.client else None,
        )
        result = await runtime.get_webhook_gateway().handle(gateway_request)

        logger.info(
            "webhook_responded",
            extra={"status_code": result.status_code, "payload_size": len(raw_body)},
        )
        return JSONResponse(
            content=result.body,
            status_code=result.status_code,
            headers={
                **_headers(),
                **result.headers,
                "X-Correlation-Id": correlation_id,
            },
        )


@router.get("")
async def webhook_health() -> JSONResponse:
    return JSONResponse(
        content={
            "status": "ok",
            "message": "Webhook API is running",
            "timestamp": datetime.now(UTC).isoformat(),
        },
        headers=_headers(),
    )


@router.options("")
async def webhook_preflight() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=_headers())


@router.get("/logs")
async def recent_webhook_logs(
    request: Request,
    limit: int = Query(DEFAULT_LOGS_LIMIT, ge=1, le=MAX_LOGS_LIMIT),
) -> JSONResponse:
    """Últimas chamadas registradas, mais recentes primeiro."""
    gateway = runtime.get_webhook_gateway()
    if not gateway.is_authorized(dict(request.headers)):
        logger.warning("webhook_logs_unauthorized")
        return JSONResponse(
            content={"success": False, "error": UNAUTHORIZED_MESSAGE},
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers=_headers(),
        )

    records = await gateway.recent_logs(limit)
    return JSONResponse(
        content={"success": True, "data": [record.to_document() for record in records]},
        headers=_headers(),
    )
