"""Autenticação do webhook por segredo compartilhado.

O header Authorization aceita `Bearer <token>` ou o token puro
(o n8n envia das duas formas conforme o nó configurado).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from app.infra.crypto import constant_time_equals

if TYPE_CHECKING:
    from collections.abc import Mapping

_BEARER_PREFIX = re.compile(r"^bearer\s+", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def extract_token(authorization: str | None) -> str | None:
    """Remove o prefixo Bearer opcional e normaliza espaços internos."""
    if not authorization:
        return None
    token = _BEARER_PREFIX.sub("", authorization.strip())
    token = _WHITESPACE.sub(" ", token).strip()
    return token or None


def is_authorized(headers: Mapping[str, str], secret: str | None) -> bool:
    """Valida o header Authorization contra o segredo configurado.

    Sem segredo configurado toda requisição é rejeitada (fail closed).

    Args:
        headers: Headers da requisição (chaves em minúsculas)
        secret: Segredo compartilhado (WEBHOOK_SECRET)

    Returns:
        True se o token confere com o segredo
    """
    if not secret:
        return False
    token = extract_token(headers.get("authorization"))
    if token is None:
        return False
    return constant_time_equals(token, secret)
