"""Mascaramento de campos sensíveis antes da gravação na auditoria.

Chaves cujo nome contém um termo sensível (senha, token, cpf, ...)
têm valores string substituídos por `xx...yy`, ou `***` quando curtos.
A varredura é recursiva em dicts e listas e não altera o original.
"""

from __future__ import annotations

from typing import Any, Final

SENSITIVE_KEY_TERMS: Final = (
    "password",
    "senha",
    "token",
    "secret",
    "authorization",
    "cpf",
    "cnpj",
    "cpf_cnpj",
)

_SHORT_VALUE_LENGTH: Final = 4
_SHORT_VALUE_MASK: Final = "***"


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(term in lowered for term in SENSITIVE_KEY_TERMS)


def mask_value(value: str) -> str:
    """`abcdef` -> `ab...ef`; até 4 caracteres -> `***`."""
    if len(value) <= _SHORT_VALUE_LENGTH:
        return _SHORT_VALUE_MASK
    return f"{value[:2]}...{value[-2:]}"


def mask_sensitive_data(data: Any) -> Any:
    """Retorna cópia de `data` com valores sensíveis mascarados."""
    if isinstance(data, dict):
        masked: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, str) and value and is_sensitive_key(str(key)):
                masked[key] = mask_value(value)
            else:
                masked[key] = mask_sensitive_data(value)
        return masked
    if isinstance(data, list):
        return [mask_sensitive_data(item) for item in data]
    return data
