"""Comandos do webhook: uma classe por valor do campo `acao`.

Instâncias só são criadas pelos validators após sanitização; o
dispatcher confia nos valores recebidos.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from app.constants import OrderStatus


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class CustomerInput(_Command):
    nome: str
    telefone: str
    email: str | None = None
    cpf_cnpj: str | None = None
    carro: str | None = None
    placa: str | None = None
    marca: str | None = None
    modelo: str | None = None
    ano: int | None = None
    cor: str | None = None


class ProcedureInput(_Command):
    descricao: str
    observacoes: str | None = None
    valor: float | None = None


class CreateOrderCommand(_Command):
    acao: Literal["criar_os"] = "criar_os"
    cliente: CustomerInput
    procedimento: ProcedureInput


class UpdateStatusCommand(_Command):
    acao: Literal["atualizar_status"] = "atualizar_status"
    numero_os: int
    status: OrderStatus
    observacao: str | None = None


class RegisterPhotoCommand(_Command):
    acao: Literal["registrar_foto"] = "registrar_foto"
    numero_os: int
    foto_url: str


class QueryOrderCommand(_Command):
    acao: Literal["consultar_os"] = "consultar_os"
    numero_os: int


WebhookCommand = (
    CreateOrderCommand | UpdateStatusCommand | RegisterPhotoCommand | QueryOrderCommand
)

__all__ = [
    "CreateOrderCommand",
    "CustomerInput",
    "ProcedureInput",
    "QueryOrderCommand",
    "RegisterPhotoCommand",
    "UpdateStatusCommand",
    "WebhookCommand",
]
