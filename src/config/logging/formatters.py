"""Formatters de logging (JSON para produção, texto para desenvolvimento)."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(correlation_id)s] %(name)s: %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com os campos obrigatórios renomeados.

    Exemplo de output:
        {"asctime": "...", "level": "INFO", "logger": "api.routes.webhook",
         "message": "webhook_action_succeeded", "correlation_id": "abc",
         "service": "oficina_webhook", "acao": "criar_os"}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)


def create_text_formatter() -> logging.Formatter:
    """Formatter de texto simples para execução local."""
    return logging.Formatter(_TEXT_FORMAT)
