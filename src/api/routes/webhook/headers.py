"""Headers de segurança e CORS das respostas do webhook."""

from __future__ import annotations

from typing import Final

SECURITY_HEADERS: Final[dict[str, str]] = {
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

CORS_ALLOWED_METHODS: Final = "GET, POST, OPTIONS"
CORS_ALLOWED_HEADERS: Final = "Content-Type, Authorization"
CORS_MAX_AGE_SECONDS: Final = 86400


def cors_headers(origin: str) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": CORS_ALLOWED_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOWED_HEADERS,
        "Access-Control-Max-Age": str(CORS_MAX_AGE_SECONDS),
    }


def webhook_response_headers(origin: str) -> dict[str, str]:
    """Headers de segurança + CORS aplicados a toda resposta do webhook."""
    return {**SECURITY_HEADERS, **cors_headers(origin)}
