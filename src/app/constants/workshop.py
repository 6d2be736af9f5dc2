"""Enums de domínio da oficina (status, ações do webhook, auditoria)."""

from __future__ import annotations

from enum import StrEnum


class OrderStatus(StrEnum):
    """Status de uma ordem de serviço.

    Qualquer status pode suceder qualquer outro; não há grafo de transições.
    """

    PENDING = "pendente"
    AWAITING_PARTS = "aguardando_pecas"
    IN_PROGRESS = "em_andamento"
    READY_FOR_PICKUP = "pronto_retirada"
    DONE = "finalizado"
    CANCELLED = "cancelado"


class ProcedureStatus(StrEnum):
    """Status de um procedimento (item faturável da OS)."""

    PENDING = "pendente"
    IN_PROGRESS = "em_andamento"
    DONE = "concluido"


class NotificationChannel(StrEnum):
    WHATSAPP = "whatsapp"
    SMS = "sms"
    EMAIL = "email"


class NotificationStatus(StrEnum):
    PENDING = "pendente"
    SENT = "enviado"
    ERROR = "erro"


class WebhookAction(StrEnum):
    """Ações aceitas no campo discriminador `acao`."""

    CREATE_ORDER = "criar_os"
    UPDATE_STATUS = "atualizar_status"
    REGISTER_PHOTO = "registrar_foto"
    QUERY_ORDER = "consultar_os"


class AuditOutcome(StrEnum):
    SUCCESS = "sucesso"
    ERROR = "erro"


# Autor registrado no histórico quando a mudança vem do webhook
WEBHOOK_ACTOR = "webhook"
