"""Settings do endpoint de webhook (entrada de automações).

Segredo compartilhado, limites de payload e de taxa, e origem CORS.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

RateLimitBackend = Literal["memory", "redis"]

DEFAULT_MAX_PAYLOAD_BYTES = 100_000


@dataclass(frozen=True)
class WebhookSettings:
    """Configurações do gateway de webhook.

    Attributes:
        secret: Segredo compartilhado exigido no header Authorization.
            Vazio rejeita toda chamada POST (fail closed).
        max_payload_bytes: Tamanho máximo do payload serializado
        rate_limit_max_requests: Requisições permitidas por janela e origem
        rate_limit_window_seconds: Duração da janela fixa
        rate_limit_backend: Store dos contadores (memory|redis)
        app_url: Origem permitida em CORS ("*" quando não configurada)
    """

    secret: str = ""
    max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 60
    rate_limit_backend: RateLimitBackend = "memory"
    app_url: str = ""

    @property
    def cors_origin(self) -> str:
        return self.app_url or "*"

    def validate(self, *, redis_url: str = "", is_dev: bool = True) -> list[str]:
        """Valida configurações do webhook.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.secret:
            errors.append("WEBHOOK_SECRET não configurado (todas as chamadas serão 401)")

        if self.max_payload_bytes <= 0:
            errors.append("WEBHOOK_MAX_PAYLOAD_BYTES deve ser > 0")

        if self.rate_limit_max_requests < 1:
            errors.append("WEBHOOK_RATE_LIMIT_MAX_REQUESTS deve ser >= 1")

        if self.rate_limit_window_seconds < 1:
            errors.append("WEBHOOK_RATE_LIMIT_WINDOW_SECONDS deve ser >= 1")

        if self.rate_limit_backend not in ("memory", "redis"):
            errors.append(f"RATE_LIMIT_BACKEND inválido: {self.rate_limit_backend}")

        if self.rate_limit_backend == "redis" and not redis_url:
            errors.append("RATE_LIMIT_BACKEND=redis requer REDIS_URL")

        if self.rate_limit_backend == "memory" and not is_dev:
            errors.append(
                "RATE_LIMIT_BACKEND=memory não coordena múltiplas instâncias; use redis"
            )

        return errors


def _load_from_env() -> WebhookSettings:
    backend_str = os.getenv("RATE_LIMIT_BACKEND", "memory").lower()
    backend: RateLimitBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return WebhookSettings(
        secret=os.getenv("WEBHOOK_SECRET", ""),
        max_payload_bytes=int(
            os.getenv("WEBHOOK_MAX_PAYLOAD_BYTES", str(DEFAULT_MAX_PAYLOAD_BYTES))
        ),
        rate_limit_max_requests=int(os.getenv("WEBHOOK_RATE_LIMIT_MAX_REQUESTS", "100")),
        rate_limit_window_seconds=int(os.getenv("WEBHOOK_RATE_LIMIT_WINDOW_SECONDS", "60")),
        rate_limit_backend=backend,
        app_url=os.getenv("APP_URL", ""),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Retorna instância cacheada de WebhookSettings."""
    return _load_from_env()
