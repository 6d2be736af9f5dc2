"""Protocolo do relay de resultados para a automação downstream."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class RelayResult:
    """Resultado não-propagável do relay.

    O chamador pode descartá-lo: falhas do relay nunca alteram a resposta
    já decidida para a requisição original.
    """

    success: bool
    status: int | None = None
    error: str | None = None

    def as_response_dict(self) -> dict[str, Any]:
        """Formato do sub-objeto `n8n` da resposta do webhook."""
        return {"enviado": self.success, "status": self.status, "erro": self.error}


class RelayClientProtocol(Protocol):
    async def send(self, payload: dict[str, Any]) -> RelayResult:
        """Uma tentativa de POST; nunca levanta exceção."""
        ...
