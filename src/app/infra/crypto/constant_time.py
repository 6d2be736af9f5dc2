"""Comparação de segredos em tempo constante."""

from __future__ import annotations


def constant_time_equals(candidate: str, secret: str) -> bool:
    """Compara duas strings sem curto-circuito no conteúdo.

    Tamanhos diferentes retornam False imediatamente (vazar o tamanho é
    aceito). Com tamanhos iguais, todos os bytes são percorridos e as
    diferenças acumuladas via XOR antes da decisão.
    """
    left = candidate.encode("utf-8")
    right = secret.encode("utf-8")
    if len(left) != len(right):
        return False

    diff = 0
    for x, y in zip(left, right, strict=True):
        diff |= x ^ y
    return diff == 0
