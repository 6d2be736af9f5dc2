"""Resolução do endereço de origem usado como chave de rate limit e auditoria."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

UNKNOWN_ADDRESS = "unknown"


def resolve_client_address(headers: Mapping[str, str], peer_host: str | None = None) -> str:
    """Primeiro IP de x-forwarded-for, depois x-real-ip, depois o peer do socket."""
    forwarded = headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    real_ip = headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    return peer_host or UNKNOWN_ADDRESS
