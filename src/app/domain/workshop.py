"""Entidades da oficina persistidas no backend.

Nomes de campos seguem o esquema das tabelas/collections (clientes,
veiculos, ordens_servico, procedimentos, historico_os, notificacoes,
webhook_logs), que é também o contrato exposto ao n8n.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.constants import (
    AuditOutcome,
    NotificationChannel,
    NotificationStatus,
    OrderStatus,
    ProcedureStatus,
)


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    return str(uuid.uuid4())


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utcnow)

    def to_document(self) -> dict[str, Any]:
        """Serializa para gravação (datas em ISO-8601, enums como string)."""
        return self.model_dump(mode="json")


class Client(_Record):
    """Cliente da oficina; telefone é a chave de deduplicação."""

    nome: str
    telefone: str
    email: str | None = None
    cpf_cnpj: str | None = None


class Vehicle(_Record):
    """Veículo de um cliente; placa é a chave de deduplicação."""

    cliente_id: str
    placa: str
    marca: str
    modelo: str
    ano: int | None = None
    cor: str | None = None


class ServiceOrder(_Record):
    """Ordem de serviço. `numero_os` é atribuído pelo store e nunca muda."""

    numero_os: int
    cliente_id: str
    veiculo_id: str | None = None
    descricao: str
    observacoes: str | None = None
    valor_total: float = 0
    status: OrderStatus = OrderStatus.PENDING
    fotos: list[str] = Field(default_factory=list)


class Procedure(_Record):
    ordem_servico_id: str
    descricao: str
    valor: float = 0
    status: ProcedureStatus = ProcedureStatus.PENDING


class HistoryEntry(_Record):
    """Entrada manual de histórico (só existe quando há observação)."""

    ordem_servico_id: str
    status_anterior: OrderStatus | None = None
    status_novo: OrderStatus
    observacao: str | None = None
    usuario: str | None = None


class Notification(_Record):
    ordem_servico_id: str
    tipo: NotificationChannel
    destinatario: str
    mensagem: str
    status: NotificationStatus = NotificationStatus.PENDING
    erro_mensagem: str | None = None
    enviado_em: datetime | None = None


class OrderDetails(ServiceOrder):
    """OS com cliente, veículo, procedimentos, histórico e notificações."""

    cliente: Client | None = None
    veiculo: Vehicle | None = None
    procedimentos: list[Procedure] = Field(default_factory=list)
    historico: list[HistoryEntry] = Field(default_factory=list)
    notificacoes: list[Notification] = Field(default_factory=list)


class WebhookLogRecord(_Record):
    """Registro append-only de uma chamada processada pelo webhook."""

    acao: str
    payload: dict[str, Any] = Field(default_factory=dict)
    status: AuditOutcome
    erro_mensagem: str | None = None
    ip_origem: str | None = None


__all__ = [
    "Client",
    "HistoryEntry",
    "Notification",
    "OrderDetails",
    "Procedure",
    "ServiceOrder",
    "Vehicle",
    "WebhookLogRecord",
    "new_id",
    "utcnow",
]
