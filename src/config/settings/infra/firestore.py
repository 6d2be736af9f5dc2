"""Settings do Firestore e seleção de backends de armazenamento."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

StoreBackend = Literal["memory", "firestore"]

_VALID_BACKENDS = ("memory", "firestore")


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore e backends dos stores.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        workshop_backend: Backend dos registros da oficina
        audit_backend: Backend do log de auditoria do webhook
        collection_*: Nomes das collections
    """

    project_id: str = ""
    workshop_backend: StoreBackend = "memory"
    audit_backend: StoreBackend = "memory"
    collection_clients: str = "clientes"
    collection_vehicles: str = "veiculos"
    collection_orders: str = "ordens_servico"
    collection_procedures: str = "procedimentos"
    collection_history: str = "historico_os"
    collection_notifications: str = "notificacoes"
    collection_webhook_logs: str = "webhook_logs"
    collection_counters: str = "counters"

    def validate(self, gcp_project: str, *, is_dev: bool = True) -> list[str]:
        """Valida configurações de armazenamento.

        Args:
            gcp_project: Projeto GCP padrão para fallback.
            is_dev: Se está em desenvolvimento.
        """
        errors: list[str] = []
        effective_project = self.project_id or gcp_project

        for name, backend in (
            ("WORKSHOP_STORE_BACKEND", self.workshop_backend),
            ("AUDIT_STORE_BACKEND", self.audit_backend),
        ):
            if backend not in _VALID_BACKENDS:
                errors.append(f"{name} inválido: {backend}")
            if backend == "memory" and not is_dev:
                errors.append(f"{name}=memory proibido em staging/production")
            if backend == "firestore" and not effective_project:
                errors.append(f"{name}=firestore requer FIRESTORE_PROJECT_ID ou GCP_PROJECT")

        return errors


def _parse_backend(value: str) -> StoreBackend:
    lowered = value.lower()
    return lowered if lowered in _VALID_BACKENDS else "memory"  # type: ignore[return-value]


def _load_firestore_from_env() -> FirestoreSettings:
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        workshop_backend=_parse_backend(os.getenv("WORKSHOP_STORE_BACKEND", "memory")),
        audit_backend=_parse_backend(os.getenv("AUDIT_STORE_BACKEND", "memory")),
        collection_clients=os.getenv("FIRESTORE_COLLECTION_CLIENTS", "clientes"),
        collection_vehicles=os.getenv("FIRESTORE_COLLECTION_VEHICLES", "veiculos"),
        collection_orders=os.getenv("FIRESTORE_COLLECTION_ORDERS", "ordens_servico"),
        collection_procedures=os.getenv("FIRESTORE_COLLECTION_PROCEDURES", "procedimentos"),
        collection_history=os.getenv("FIRESTORE_COLLECTION_HISTORY", "historico_os"),
        collection_notifications=os.getenv(
            "FIRESTORE_COLLECTION_NOTIFICATIONS", "notificacoes"
        ),
        collection_webhook_logs=os.getenv("FIRESTORE_COLLECTION_WEBHOOK_LOGS", "webhook_logs"),
        collection_counters=os.getenv("FIRESTORE_COLLECTION_COUNTERS", "counters"),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
