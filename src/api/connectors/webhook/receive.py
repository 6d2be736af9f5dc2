"""Parse do corpo JSON do webhook e limite de tamanho."""

from __future__ import annotations

import json
from typing import Any, Final

# Corpo bruto pode ter espaçamento além do JSON compacto; acima disso
# nem é parseado.
RAW_BODY_SLACK_FACTOR: Final = 4


class WebhookRequestError(ValueError):
    """Erro base para falhas de leitura do webhook."""


class InvalidJsonError(WebhookRequestError):
    """Corpo vazio, JSON inválido ou que não é objeto."""


class PayloadTooLargeError(WebhookRequestError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__("payload_too_large")
        self.size = size
        self.limit = limit


def serialized_size(payload: Any) -> int:
    """Tamanho em bytes (UTF-8) do payload re-serializado."""
    return len(json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


def parse_webhook_body(raw_body: bytes, max_payload_bytes: int) -> dict[str, Any]:
    """Parseia o JSON e aplica o limite sobre o tamanho serializado.

    O corpo bruto acima de `RAW_BODY_SLACK_FACTOR` vezes o limite é
    recusado antes do parse.

    Raises:
        InvalidJsonError: Se o corpo estiver vazio, inválido ou não for objeto
        PayloadTooLargeError: Se o corpo bruto ou o payload serializado
            exceder o limite
    """
    if len(raw_body) > max_payload_bytes * RAW_BODY_SLACK_FACTOR:
        raise PayloadTooLargeError(len(raw_body), max_payload_bytes)

    if not raw_body or not raw_body.strip():
        raise InvalidJsonError("empty_body")

    try:
        payload = json.loads(raw_body)
    except RecursionError as exc:
        raise InvalidJsonError("json_too_deep") from exc
    except ValueError as exc:
        # JSONDecodeError, UnicodeDecodeError e inteiros acima do limite de dígitos
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    try:
        size = serialized_size(payload)
    except (ValueError, RecursionError) as exc:
        raise InvalidJsonError("invalid_json") from exc
    if size > max_payload_bytes:
        raise PayloadTooLargeError(size, max_payload_bytes)

    return payload
