"""Rate limiter de janela fixa por origem.

A decisão é calculada sobre um store injetável: em memória para uma
instância única, Redis quando há múltiplas instâncias.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from app.protocols.rate_limit_store import RateLimitStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    """Decisão para uma requisição.

    Attributes:
        allowed: Se a requisição pode prosseguir
        remaining: Requisições restantes na janela
        reset_at: Epoch (segundos) em que a janela reinicia
    """

    allowed: bool
    remaining: int
    reset_at: float

    def retry_after(self, now: float) -> int:
        """Segundos inteiros até o reset (mínimo 1)."""
        return max(1, math.ceil(self.reset_at - now))


class RateLimiter:
    """Limita `max_requests` por chave a cada `window_seconds`.

    Args:
        store: Store dos contadores
        max_requests: Máximo de requisições por janela
        window_seconds: Duração da janela
        clock: Fonte de tempo em epoch segundos
    """

    def __init__(
        self,
        store: RateLimitStoreProtocol,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_requests < 1 or window_seconds < 1:
            msg = "max_requests e window_seconds devem ser >= 1"
            raise ValueError(msg)
        self._store = store
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._clock = clock

    def now(self) -> float:
        return self._clock()

    async def check(self, key: str) -> RateLimitDecision:
        """Registra a requisição e decide se ela está dentro do limite.

        Falha do store (ex.: Redis fora) libera a requisição: autenticação
        e validação continuam protegendo o endpoint.
        """
        now = self._clock()
        try:
            count, reset_at = await self._store.hit(key, self._window_seconds, now)
        except InfrastructureError as exc:
            logger.warning(
                "rate_limit_store_unavailable",
                extra={"error_type": type(exc).__name__},
            )
            return RateLimitDecision(
                allowed=True,
                remaining=self._max_requests,
                reset_at=now + self._window_seconds,
            )

        if count > self._max_requests:
            return RateLimitDecision(allowed=False, remaining=0, reset_at=reset_at)
        return RateLimitDecision(
            allowed=True,
            remaining=self._max_requests - count,
            reset_at=reset_at,
        )
