"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e mantém os singletons dos stores.

Uso:
    from app.bootstrap import initialize_app, get_workshop_store

    # Na inicialização do serviço
    initialize_app()

    store = get_workshop_store()
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_relay_settings,
    get_webhook_settings,
)

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    settings = get_base_settings()
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Logging em DEBUG sem JSON para facilitar debug em testes."""
    configure_logging(
        level="DEBUG",
        service_name=f"{get_base_settings().service_name}_test",
        correlation_id_getter=get_correlation_id,
        json_output=False,
    )


def collect_settings_errors() -> list[str]:
    """Erros de todas as settings, prefixados pelo grupo."""
    base = get_base_settings()
    is_dev = base.is_development
    errors: list[str] = [f"base: {error}" for error in base.validate()]

    webhook_errors = get_webhook_settings().validate(redis_url=base.redis_url, is_dev=is_dev)
    errors.extend(f"webhook: {error}" for error in webhook_errors)

    relay_errors = get_relay_settings().validate()
    errors.extend(f"relay: {error}" for error in relay_errors)

    firestore_errors = get_firestore_settings().validate(base.gcp_project, is_dev=is_dev)
    errors.extend(f"firestore: {error}" for error in firestore_errors)
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    environment = get_base_settings().environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Store Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_workshop_store():
    """Obtém store da oficina (singleton)."""
    from app.bootstrap.dependencies import create_workshop_store
    return create_workshop_store()


@lru_cache(maxsize=1)
def get_audit_store():
    """Obtém store de auditoria do webhook (singleton)."""
    from app.bootstrap.dependencies import create_audit_store
    return create_audit_store()


@lru_cache(maxsize=1)
def get_rate_limit_store():
    """Obtém store dos contadores de rate limit (singleton)."""
    from app.bootstrap.dependencies import create_rate_limit_store
    return create_rate_limit_store()
