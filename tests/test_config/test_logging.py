"""Testes para config.logging.

Cobre: configure_logging, get_logger, CorrelationIdFilter e formatters.
"""

from __future__ import annotations

import json
import logging

import pytest

from app.observability import correlation_scope, get_correlation_id
from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    create_text_formatter,
    get_logger,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "message", name: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_configure_logging_levels(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_configure_logging_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_correlation_filter(self) -> None:
        configure_logging(correlation_id_getter=lambda: "custom-corr-id")
        handler = logging.getLogger().handlers[0]
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_text_output_uses_plain_formatter(self) -> None:
        configure_logging(json_output=False)
        handler = logging.getLogger().handlers[0]
        assert type(handler.formatter) is logging.Formatter

    def test_noisy_loggers_are_raised_to_warning(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "oficina_webhook"


def test_get_logger_same_name_returns_same_instance() -> None:
    assert get_logger("same.module") is get_logger("same.module")


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        filter_ = CorrelationIdFilter("service_name", None)
        record = _record()
        filter_.filter(record)
        assert record.correlation_id == ""

    def test_filter_reads_request_scope(self) -> None:
        filter_ = CorrelationIdFilter("svc", get_correlation_id)
        record = _record()
        with correlation_scope("req-42"):
            filter_.filter(record)
        assert record.correlation_id == "req-42"


class TestFormatters:
    """Testes para os formatters JSON e texto."""

    def test_required_log_fields_content(self) -> None:
        assert REQUIRED_LOG_FIELDS == (
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        )
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_formatter_renames_fields(self) -> None:
        formatter = create_json_formatter()
        record = _record("webhook_action_succeeded", name="api.routes.webhook")
        record.correlation_id = "abc-123"
        record.service = "oficina_webhook"
        record.acao = "criar_os"

        output = json.loads(formatter.format(record))

        assert output["message"] == "webhook_action_succeeded"
        assert output["level"] == "INFO"
        assert output["logger"] == "api.routes.webhook"
        assert output["correlation_id"] == "abc-123"
        assert output["service"] == "oficina_webhook"
        assert output["acao"] == "criar_os"

    def test_text_formatter_includes_correlation_id(self) -> None:
        record = _record("hello", name="local")
        record.correlation_id = "c-1"
        output = create_text_formatter().format(record)
        assert "[c-1]" in output
        assert "local: hello" in output
