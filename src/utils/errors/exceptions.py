"""Exceções de infraestrutura compartilhadas entre stores e gateway."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de backend (armazenamento, contadores)."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout no Redis dos contadores de rate limit."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha ao ler ou gravar registros da oficina no Firestore."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Falha no Firestore durante {operation}")
        self.operation = operation
