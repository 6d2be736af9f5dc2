"""Validators do webhook da oficina.

Uso:
    from api.validators.webhook import parse_action, validate_action_payload

    action = parse_action(payload.get("acao"))
    result = validate_action_payload(action, payload)
    if not result.valid:
        ...  # result.errors lista todas as regras violadas
"""

from api.validators.webhook.payloads import (
    UNKNOWN_ACTION_MESSAGE,
    ValidationResult,
    parse_action,
    validate_action_payload,
    validate_create_order_payload,
    validate_query_order_payload,
    validate_register_photo_payload,
    validate_update_status_payload,
)

__all__ = [
    "UNKNOWN_ACTION_MESSAGE",
    "ValidationResult",
    "parse_action",
    "validate_action_payload",
    "validate_create_order_payload",
    "validate_query_order_payload",
    "validate_register_photo_payload",
    "validate_update_status_payload",
]
