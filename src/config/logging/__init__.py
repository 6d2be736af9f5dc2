"""Logging estruturado do gateway de webhooks da oficina.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="oficina_webhook")
    logger = get_logger(__name__)
    logger.info("webhook_action_succeeded", extra={"acao": "criar_os"})

Todo registro carrega correlation_id e service. Telefones, documentos
e segredos nunca entram em `extra`.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_text_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "create_text_formatter",
    "get_logger",
]
