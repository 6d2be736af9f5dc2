"""Validação composta dos payloads por ação.

Cada validator percorre todas as regras e acumula as mensagens de erro;
quando não há erros, devolve o comando já sanitizado.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from api.validators.webhook import fields
from app.constants import OrderStatus, WebhookAction
from app.domain.commands import (
    CreateOrderCommand,
    CustomerInput,
    ProcedureInput,
    QueryOrderCommand,
    RegisterPhotoCommand,
    UpdateStatusCommand,
    WebhookCommand,
)

UNKNOWN_ACTION_MESSAGE = "Ação não reconhecida"
INVALID_ORDER_NUMBER_MESSAGE = "Número da OS inválido (inteiro entre 1 e 9999999)"

DESCRIPTION_MIN_LENGTH = 3


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Resultado de validação: comando sanitizado ou lista de erros."""

    valid: bool
    data: WebhookCommand | None = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, data: WebhookCommand) -> ValidationResult:
        return cls(valid=True, data=data)

    @classmethod
    def failed(cls, errors: list[str]) -> ValidationResult:
        return cls(valid=False, errors=list(errors))


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _coerce_year(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return fields.parse_digit_string(value)


def _validate_customer(customer: Any, errors: list[str]) -> None:
    if not isinstance(customer, Mapping):
        errors.append("Cliente é obrigatório")
        return

    nome = customer.get("nome")
    if not isinstance(nome, str) or not nome.strip():
        errors.append("Nome do cliente é obrigatório")
    elif not fields.is_valid_name(nome.strip()):
        errors.append("Nome do cliente deve ter entre 2 e 200 caracteres")

    telefone = customer.get("telefone")
    if not isinstance(telefone, str) or not telefone.strip():
        errors.append("Telefone do cliente é obrigatório")
    elif not fields.is_valid_phone(telefone):
        errors.append("Telefone inválido")

    if _present(customer.get("email")) and not fields.is_valid_email(customer.get("email")):
        errors.append("Email inválido")

    if _present(customer.get("cpf_cnpj")) and not fields.is_valid_document(
        customer.get("cpf_cnpj")
    ):
        errors.append("CPF/CNPJ inválido")

    if _present(customer.get("placa")) and not fields.is_valid_plate(customer.get("placa")):
        errors.append("Placa inválida")

    ano = customer.get("ano")
    if _present(ano) and not fields.is_valid_year(_coerce_year(ano)):
        errors.append("Ano do veículo inválido")


def _validate_procedure(procedure: Any, errors: list[str]) -> None:
    if not isinstance(procedure, Mapping):
        errors.append("Procedimento é obrigatório")
        return

    descricao = procedure.get("descricao")
    if not isinstance(descricao, str) or not descricao.strip():
        errors.append("Descrição do procedimento é obrigatória")
    elif not (
        DESCRIPTION_MIN_LENGTH <= len(descricao.strip()) <= fields.MEDIUM_TEXT_LIMIT
    ):
        errors.append("Descrição do procedimento deve ter entre 3 e 500 caracteres")

    valor = procedure.get("valor")
    if valor is not None and not fields.is_non_negative_number(valor):
        errors.append("Valor do procedimento deve ser um número positivo")

    observacoes = procedure.get("observacoes")
    if _present(observacoes):
        if not isinstance(observacoes, str):
            errors.append("Observações devem ser texto")
        elif len(observacoes) > fields.LONG_TEXT_LIMIT:
            errors.append("Observações muito longas (máximo 1000 caracteres)")


def _optional_text(value: Any, max_length: int) -> str | None:
    return fields.sanitize_text(value, max_length) or None


def validate_create_order_payload(payload: Mapping[str, Any]) -> ValidationResult:
    """Valida e sanitiza o payload de `criar_os`."""
    errors: list[str] = []
    customer = payload.get("cliente")
    procedure = payload.get("procedimento")
    _validate_customer(customer, errors)
    _validate_procedure(procedure, errors)
    if errors:
        return ValidationResult.failed(errors)

    # Após a validação, cliente e procedimento são Mappings
    valor = procedure.get("valor")
    command = CreateOrderCommand(
        cliente=CustomerInput(
            nome=fields.sanitize_text(customer["nome"], fields.SHORT_TEXT_LIMIT),
            telefone=fields.digits_only(customer["telefone"]),
            email=_optional_text(customer.get("email"), fields.EMAIL_MAX_LENGTH),
            cpf_cnpj=fields.digits_only(customer.get("cpf_cnpj")) or None,
            carro=_optional_text(customer.get("carro"), fields.SHORT_TEXT_LIMIT),
            placa=fields.normalize_plate(customer.get("placa")) or None,
            marca=_optional_text(customer.get("marca"), fields.SHORT_TEXT_LIMIT),
            modelo=_optional_text(customer.get("modelo"), fields.SHORT_TEXT_LIMIT),
            ano=_coerce_year(customer.get("ano")),
            cor=_optional_text(customer.get("cor"), fields.SHORT_TEXT_LIMIT),
        ),
        procedimento=ProcedureInput(
            descricao=fields.sanitize_text(procedure["descricao"], fields.MEDIUM_TEXT_LIMIT),
            observacoes=_optional_text(procedure.get("observacoes"), fields.LONG_TEXT_LIMIT),
            valor=float(valor) if valor is not None else None,
        ),
    )
    return ValidationResult.ok(command)


def validate_update_status_payload(payload: Mapping[str, Any]) -> ValidationResult:
    """Valida `atualizar_status`: número da OS, status e observação opcional."""
    errors: list[str] = []
    numero_os = fields.parse_order_number(payload.get("numero_os"))
    if numero_os is None:
        errors.append(INVALID_ORDER_NUMBER_MESSAGE)

    status = payload.get("status")
    if not fields.is_valid_status(status):
        allowed = ", ".join(s.value for s in OrderStatus)
        errors.append(f"Status inválido (permitidos: {allowed})")

    observacao = payload.get("observacao")
    if _present(observacao) and not isinstance(observacao, str):
        errors.append("Observação deve ser texto")

    if errors:
        return ValidationResult.failed(errors)

    return ValidationResult.ok(
        UpdateStatusCommand(
            numero_os=numero_os,
            status=OrderStatus(status),
            observacao=_optional_text(observacao, fields.MEDIUM_TEXT_LIMIT),
        )
    )


def validate_register_photo_payload(payload: Mapping[str, Any]) -> ValidationResult:
    """Valida `registrar_foto`: número da OS e URL http(s) da foto."""
    errors: list[str] = []
    numero_os = fields.parse_order_number(payload.get("numero_os"))
    if numero_os is None:
        errors.append(INVALID_ORDER_NUMBER_MESSAGE)

    foto_url = payload.get("foto_url")
    if not fields.is_valid_url(foto_url):
        errors.append("URL da foto inválida (use http ou https)")

    if errors:
        return ValidationResult.failed(errors)

    return ValidationResult.ok(
        RegisterPhotoCommand(numero_os=numero_os, foto_url=foto_url.strip())
    )


def validate_query_order_payload(payload: Mapping[str, Any]) -> ValidationResult:
    numero_os = fields.parse_order_number(payload.get("numero_os"))
    if numero_os is None:
        return ValidationResult.failed([INVALID_ORDER_NUMBER_MESSAGE])
    return ValidationResult.ok(QueryOrderCommand(numero_os=numero_os))


ACTION_VALIDATORS: dict[WebhookAction, Callable[[Mapping[str, Any]], ValidationResult]] = {
    WebhookAction.CREATE_ORDER: validate_create_order_payload,
    WebhookAction.UPDATE_STATUS: validate_update_status_payload,
    WebhookAction.REGISTER_PHOTO: validate_register_photo_payload,
    WebhookAction.QUERY_ORDER: validate_query_order_payload,
}


def parse_action(value: Any) -> WebhookAction | None:
    """Converte o discriminador `acao` em WebhookAction (None se desconhecido)."""
    if not isinstance(value, str):
        return None
    try:
        return WebhookAction(value)
    except ValueError:
        return None


def validate_action_payload(
    action: WebhookAction,
    payload: Mapping[str, Any],
) -> ValidationResult:
    """Executa o validator específico da ação."""
    return ACTION_VALIDATORS[action](payload)
