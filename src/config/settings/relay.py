"""Settings do relay para o n8n (automação downstream)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class RelaySettings:
    """Configurações do relay de resultados.

    Attributes:
        url: Endpoint do webhook do n8n que recebe os resultados
        api_key: Credencial enviada como Bearer
        timeout_seconds: Timeout da única tentativa de POST
    """

    url: str = ""
    api_key: str = ""
    timeout_seconds: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.url and not self.url.startswith(("http://", "https://")):
            errors.append("N8N_WEBHOOK_URL deve usar http ou https")
        if self.url and not self.api_key:
            errors.append("N8N_API_KEY não configurado para o relay")
        if self.timeout_seconds <= 0:
            errors.append("N8N_TIMEOUT_SECONDS deve ser > 0")
        return errors


def _load_from_env() -> RelaySettings:
    return RelaySettings(
        url=os.getenv("N8N_WEBHOOK_URL", ""),
        api_key=os.getenv("N8N_API_KEY", ""),
        timeout_seconds=float(os.getenv("N8N_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_relay_settings() -> RelaySettings:
    """Retorna instância cacheada de RelaySettings."""
    return _load_from_env()
