"""Redis Rate Limit Store: contadores compartilhados entre instâncias.

Usa INCR + PEXPIRE na mesma pipeline: a primeira requisição da janela
cria a chave com TTL; as seguintes só incrementam. O TTL restante define
o reset_at devolvido ao chamador.

Contrato de Keys:
    A chave é a origem da requisição (IP). Logs mostram apenas o prefixo.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.rate_limit_store import RateLimitStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

RATE_LIMIT_PREFIX = "ratelimit:webhook:"


class RedisRateLimitStore(RateLimitStoreProtocol):
    """Store de rate limit usando Redis (Upstash compatível).

    Args:
        async_redis_client: Cliente Redis assíncrono
        prefix: Namespace das chaves
    """

    def __init__(
        self,
        async_redis_client: AsyncRedis[bytes],
        prefix: str = RATE_LIMIT_PREFIX,
    ) -> None:
        self._redis = async_redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def hit(self, key: str, window_seconds: int, now: float) -> tuple[int, float]:
        redis_key = self._key(key)
        window_ms = window_seconds * 1000
        try:
            pipeline = self._redis.pipeline()
            pipeline.incr(redis_key)
            pipeline.pttl(redis_key)
            count, ttl_ms = await pipeline.execute()
            # Chave nova (ou sem TTL por falha anterior): inicia a janela
            if count == 1 or ttl_ms is None or ttl_ms < 0:
                await self._redis.pexpire(redis_key, window_ms)
                ttl_ms = window_ms
        except Exception as exc:
            raise RedisConnectionError("Falha ao incrementar rate limit no Redis") from exc

        if count == 1:
            key_masked = key[:6] + "..." if len(key) > 6 else key
            logger.debug("rate_limit_window_started", extra={"key": key_masked})
        return int(count), now + ttl_ms / 1000
