"""Gateway do webhook de automação.

Estágios por requisição, cada um com saída antecipada:

1. Rate limit por origem -> 429 com `retryAfter`
2. Autorização por segredo compartilhado -> 401
3. Parse JSON -> 400; payload serializado acima do limite -> 413
4. `acao` conhecida -> 400 (auditado como "unknown")
5. Validação específica da ação -> 400 com erros itemizados
6. Dispatch; auditoria e relay best-effort; 200 ou 500

Nada aqui depende do framework HTTP: a rota converte `GatewayResponse`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from api.connectors.webhook import (
    InvalidJsonError,
    PayloadTooLargeError,
    is_authorized,
    parse_webhook_body,
    resolve_client_address,
)
from api.validators.webhook import (
    UNKNOWN_ACTION_MESSAGE,
    parse_action,
    validate_action_payload,
)
from app.constants import AuditOutcome

if TYPE_CHECKING:
    from app.domain.commands import WebhookCommand
    from app.domain.workshop import WebhookLogRecord
    from app.protocols.relay import RelayClientProtocol
    from app.services.audit_logger import WebhookAuditLogger
    from app.services.rate_limiter import RateLimiter
    from app.use_cases.webhook.dispatcher import WebhookActionDispatcher
    from config.settings.webhook import WebhookSettings

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized"
INVALID_JSON_MESSAGE = "Invalid JSON payload"
PAYLOAD_TOO_LARGE_MESSAGE = "Payload too large"
RATE_LIMITED_MESSAGE = "Too many requests"
INVALID_PAYLOAD_MESSAGE = "Payload inválido"
UNKNOWN_ACTION_AUDIT_TAG = "unknown"


@dataclass(frozen=True, slots=True)
class GatewayRequest:
    """Requisição já extraída do transporte (headers com chaves minúsculas)."""

    headers: Mapping[str, str]
    body: bytes
    peer_host: str | None = None


@dataclass(frozen=True, slots=True)
class GatewayResponse:
    status_code: int
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


def _error(status_code: int, message: str, **extra: Any) -> GatewayResponse:
    return GatewayResponse(status_code, {"success": False, "error": message, **extra})


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat()


class WebhookGateway:
    """Orquestra rate limit, autenticação, validação, dispatch, auditoria e relay."""

    def __init__(
        self,
        settings: WebhookSettings,
        rate_limiter: RateLimiter,
        dispatcher: WebhookActionDispatcher,
        audit_logger: WebhookAuditLogger,
        relay: RelayClientProtocol,
        timestamp: Callable[[], str] = _utc_timestamp,
    ) -> None:
        self._settings = settings
        self._rate_limiter = rate_limiter
        self._dispatcher = dispatcher
        self._audit = audit_logger
        self._relay = relay
        self._timestamp = timestamp

    def is_authorized(self, headers: Mapping[str, str]) -> bool:
        return is_authorized(headers, self._settings.secret)

    async def handle(self, request: GatewayRequest) -> GatewayResponse:
        source = resolve_client_address(request.headers, request.peer_host)

        decision = await self._rate_limiter.check(source)
        if not decision.allowed:
            retry_after = decision.retry_after(self._rate_limiter.now())
            logger.warning("webhook_rate_limited", extra={"retry_after": retry_after})
            response = _error(429, RATE_LIMITED_MESSAGE, retryAfter=retry_after)
            response.headers["Retry-After"] = str(retry_after)
            return response

        if not self.is_authorized(request.headers):
            logger.warning("webhook_unauthorized")
            return _error(401, UNAUTHORIZED_MESSAGE)

        try:
            payload = parse_webhook_body(request.body, self._settings.max_payload_bytes)
        except PayloadTooLargeError as exc:
            logger.warning(
                "webhook_payload_too_large",
                extra={"payload_size": exc.size, "limit": exc.limit},
            )
            return _error(413, PAYLOAD_TOO_LARGE_MESSAGE)
        except InvalidJsonError as exc:
            logger.warning("webhook_json_invalid", extra={"reason": str(exc)})
            return _error(400, INVALID_JSON_MESSAGE)

        action = parse_action(payload.get("acao"))
        if action is None:
            logger.warning("webhook_unknown_action")
            await self._audit.log(
                UNKNOWN_ACTION_AUDIT_TAG,
                payload,
                AuditOutcome.ERROR,
                UNKNOWN_ACTION_MESSAGE,
                source,
            )
            return _error(400, UNKNOWN_ACTION_MESSAGE)

        validation = validate_action_payload(action, payload)
        if not validation.valid or validation.data is None:
            logger.info(
                "webhook_validation_failed",
                extra={"acao": action.value, "error_count": len(validation.errors)},
            )
            return _error(400, INVALID_PAYLOAD_MESSAGE, errors=validation.errors)

        return await self.run_command(validation.data, payload, source)

    async def run_command(
        self,
        command: WebhookCommand,
        payload: dict[str, Any],
        source_address: str | None,
    ) -> GatewayResponse:
        """Despacha um comando validado, audita e repassa o resultado ao n8n.

        Falhas de auditoria e do relay não alteram o status já decidido.
        """
        outcome = await self._dispatcher.dispatch(command)

        if not outcome.success:
            error_message = outcome.error or "Erro desconhecido"
            await self._audit.log(
                command.acao, payload, AuditOutcome.ERROR, error_message, source_address
            )
            await self._relay.send(
                {
                    "acao": command.acao,
                    "sucesso": False,
                    "erro": error_message,
                    "timestamp": self._timestamp(),
                }
            )
            return _error(500, error_message)

        await self._audit.log(command.acao, payload, AuditOutcome.SUCCESS, None, source_address)
        relay_result = await self._relay.send(
            {
                "acao": command.acao,
                "sucesso": True,
                "resultado": outcome.data,
                "timestamp": self._timestamp(),
            }
        )
        logger.info(
            "webhook_action_completed",
            extra={"acao": command.acao, "relay_sent": relay_result.success},
        )
        return GatewayResponse(
            200,
            {
                "success": True,
                "data": outcome.data,
                "n8n": relay_result.as_response_dict(),
            },
        )

    async def recent_logs(self, limit: int) -> list[WebhookLogRecord]:
        return await self._audit.recent(limit)
