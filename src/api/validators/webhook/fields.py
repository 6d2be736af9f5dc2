"""Validadores e sanitizadores de campos do webhook.

Funções puras: recebem valores não tipados vindos do JSON e nunca
levantam exceção. Validadores retornam bool; sanitizadores retornam o
valor normalizado.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime
from typing import Any, Final
from urllib.parse import urlparse

from app.constants import OrderStatus

# Limites de texto livre
SHORT_TEXT_LIMIT: Final = 200
MEDIUM_TEXT_LIMIT: Final = 500
LONG_TEXT_LIMIT: Final = 1000

NAME_MIN_LENGTH: Final = 2
NAME_MAX_LENGTH: Final = 200
EMAIL_MAX_LENGTH: Final = 255
URL_MAX_LENGTH: Final = 2048
MAX_ORDER_NUMBER: Final = 9_999_999
MAX_DIGIT_STRING_LENGTH: Final = 18
MIN_VEHICLE_YEAR: Final = 1900

_EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Padrão antigo (ABC1234) e Mercosul (ABC1D23)
_PLATE_PATTERN: Final = re.compile(r"^[A-Z]{3}[0-9][A-Z0-9][0-9]{2}$")
_NON_DIGITS: Final = re.compile(r"\D")
_NON_ALNUM: Final = re.compile(r"[^A-Za-z0-9]")
_ANGLE_BRACKETS: Final = re.compile(r"[<>]")

_VALID_STATUSES: Final = frozenset(status.value for status in OrderStatus)


def sanitize_text(value: Any, max_length: int = LONG_TEXT_LIMIT) -> str:
    """Remove < e >, apara espaços e trunca.

    Valores não-string viram string vazia.
    """
    if not isinstance(value, str) or not value:
        return ""
    return _ANGLE_BRACKETS.sub("", value.strip())[:max_length]


def digits_only(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return _NON_DIGITS.sub("", value)


def normalize_plate(value: Any) -> str:
    """Remove separadores e converte a placa para maiúsculas."""
    if not isinstance(value, str):
        return ""
    return _NON_ALNUM.sub("", value).upper()


def is_valid_name(value: Any) -> bool:
    return isinstance(value, str) and NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH


def is_valid_phone(value: Any) -> bool:
    """Telefone brasileiro: 10 ou 11 dígitos após normalização."""
    return 10 <= len(digits_only(value)) <= 11


def is_valid_email(value: Any) -> bool:
    return (
        isinstance(value, str)
        and len(value) <= EMAIL_MAX_LENGTH
        and _EMAIL_PATTERN.match(value) is not None
    )


def is_valid_document(value: Any) -> bool:
    """CPF (11 dígitos) ou CNPJ (14 dígitos), apenas formato."""
    return len(digits_only(value)) in (11, 14)


def is_valid_plate(value: Any) -> bool:
    return _PLATE_PATTERN.match(normalize_plate(value)) is not None


def is_valid_year(value: Any, *, now: datetime | None = None) -> bool:
    if not _is_int(value):
        return False
    current_year = (now or datetime.now(UTC)).year
    return MIN_VEHICLE_YEAR <= value <= current_year + 1


def is_valid_status(value: Any) -> bool:
    return isinstance(value, str) and value in _VALID_STATUSES


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str) or not value or len(value) > URL_MAX_LENGTH:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_digit_string(value: Any) -> int | None:
    """Converte string só com dígitos ASCII (ex.: `" 42 "`) para int.

    Strings longas demais retornam None em vez de estourar o limite de
    conversão do `int`.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or len(text) > MAX_DIGIT_STRING_LENGTH:
        return None
    if not (text.isascii() and text.isdecimal()):
        return None
    return int(text)


def parse_order_number(value: Any) -> int | None:
    """Converte número de OS para int (aceita string só com dígitos).

    Returns:
        Número entre 1 e 9.999.999, ou None se inválido.
    """
    if _is_int(value):
        number = value
    elif (parsed := parse_digit_string(value)) is not None:
        number = parsed
    else:
        return None
    if 0 < number <= MAX_ORDER_NUMBER:
        return number
    return None


def is_valid_order_number(value: Any) -> bool:
    return parse_order_number(value) is not None


def is_non_negative_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    try:
        number = float(value)
    except OverflowError:
        # inteiro JSON grande demais para float
        return False
    return math.isfinite(number) and number >= 0


def _is_int(value: Any) -> bool:
    # bool é subclasse de int e não conta como número aqui
    return isinstance(value, int) and not isinstance(value, bool)
