"""Protocolo do store de contadores de rate limit (janela fixa)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class RateLimitStoreProtocol(ABC):
    """Contador por chave com janela fixa.

    Método canônico:
    - hit(key, window_seconds, now) -> (count, reset_at)
      Na primeira chamada da chave, ou com a janela vencida, reinicia o
      contador em 1 com reset_at = now + window. Caso contrário incrementa
      e mantém o reset_at existente.
    """

    @abstractmethod
    async def hit(self, key: str, window_seconds: int, now: float) -> tuple[int, float]:
        """Registra uma requisição para a chave.

        Args:
            key: Identificador da origem (ex.: IP)
            window_seconds: Duração da janela
            now: Epoch em segundos

        Returns:
            (contagem na janela atual, epoch de reset da janela)
        """
