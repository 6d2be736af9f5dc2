"""Configuração do pytest para o gateway de webhooks da oficina."""

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from api.routes.webhook.gateway import WebhookGateway  # noqa: E402
from app.infra.stores import (  # noqa: E402
    MemoryAuditStore,
    MemoryRateLimitStore,
    MemoryWorkshopStore,
)
from app.protocols.relay import RelayResult  # noqa: E402
from app.services.audit_logger import WebhookAuditLogger  # noqa: E402
from app.services.rate_limiter import RateLimiter  # noqa: E402
from app.use_cases.webhook import WebhookActionDispatcher  # noqa: E402
from config.settings.webhook import WebhookSettings  # noqa: E402


@dataclass
class GatewayHarness:
    """Gateway com stores em memória, relay mockado e relógio controlável."""

    gateway: WebhookGateway
    workshop: MemoryWorkshopStore
    audit: MemoryAuditStore
    relay: AsyncMock
    clock: list[float]
    secret: str
    timestamp: str = "2026-01-01T00:00:00+00:00"


def build_gateway_harness(
    *,
    secret: str = "segredo-compartilhado",
    max_requests: int = 100,
    max_payload_bytes: int = 100_000,
) -> GatewayHarness:
    workshop = MemoryWorkshopStore()
    audit = MemoryAuditStore()
    relay = AsyncMock()
    relay.send.return_value = RelayResult(success=True, status=200)
    clock = [1000.0]
    settings = WebhookSettings(
        secret=secret,
        max_payload_bytes=max_payload_bytes,
        rate_limit_max_requests=max_requests,
    )
    harness_timestamp = GatewayHarness.timestamp
    gateway = WebhookGateway(
        settings=settings,
        rate_limiter=RateLimiter(
            MemoryRateLimitStore(cleanup_probability=0.0),
            max_requests,
            settings.rate_limit_window_seconds,
            clock=lambda: clock[0],
        ),
        dispatcher=WebhookActionDispatcher(workshop),
        audit_logger=WebhookAuditLogger(audit),
        relay=relay,
        timestamp=lambda: harness_timestamp,
    )
    return GatewayHarness(gateway, workshop, audit, relay, clock, secret)


@pytest.fixture
def make_harness() -> Callable[..., GatewayHarness]:
    return build_gateway_harness


@pytest.fixture
def harness() -> GatewayHarness:
    return build_gateway_harness()
