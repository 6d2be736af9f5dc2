"""Webhook de automação: autenticação, origem e parse da requisição."""

from .auth import extract_token, is_authorized
from .client_address import UNKNOWN_ADDRESS, resolve_client_address
from .receive import (
    InvalidJsonError,
    PayloadTooLargeError,
    WebhookRequestError,
    parse_webhook_body,
    serialized_size,
)

__all__ = [
    "UNKNOWN_ADDRESS",
    "InvalidJsonError",
    "PayloadTooLargeError",
    "WebhookRequestError",
    "extract_token",
    "is_authorized",
    "parse_webhook_body",
    "resolve_client_address",
    "serialized_size",
]
