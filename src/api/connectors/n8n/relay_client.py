"""Cliente do relay de resultados para o workflow n8n."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from app.protocols.relay import RelayResult

if TYPE_CHECKING:
    from config.settings.relay import RelaySettings

logger = logging.getLogger(__name__)

RELAY_NOT_CONFIGURED = "relay_not_configured"


class N8nRelayClient:
    """Envia o resultado de cada ação ao n8n em uma única tentativa.

    Não há retry: o relay é best-effort e o chamador sempre recebe um
    `RelayResult`, nunca uma exceção.
    """

    def __init__(
        self,
        settings: RelaySettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._settings.api_key:
            headers["Authorization"] = f"Bearer {self._settings.api_key}"
        return headers

    async def send(self, payload: dict[str, Any]) -> RelayResult:
        if not self._settings.enabled:
            return RelayResult(success=False, error=RELAY_NOT_CONFIGURED)

        try:
            if self._client is not None:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "n8n_relay_failed",
                extra={"error_type": type(exc).__name__},
            )
            return RelayResult(success=False, error=str(exc) or type(exc).__name__)

        if response.is_success:
            logger.info("n8n_relay_sent", extra={"status_code": response.status_code})
            return RelayResult(success=True, status=response.status_code)

        logger.warning(
            "n8n_relay_rejected",
            extra={"status_code": response.status_code},
        )
        return RelayResult(
            success=False,
            status=response.status_code,
            error=f"HTTP {response.status_code}",
        )

    async def _post(
        self,
        client: httpx.AsyncClient,
        payload: dict[str, Any],
    ) -> httpx.Response:
        return await client.post(
            self._settings.url,
            json=payload,
            headers=self._headers(),
            timeout=self._settings.timeout_seconds,
        )
