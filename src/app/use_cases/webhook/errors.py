"""Erros de negócio das ações do webhook."""

from __future__ import annotations


class ActionError(Exception):
    """Falha de negócio com mensagem exposta ao chamador."""


class OrderNotFoundError(ActionError):
    def __init__(self, numero_os: int) -> None:
        super().__init__(f"Ordem de serviço #{numero_os} não encontrada")
        self.numero_os = numero_os
