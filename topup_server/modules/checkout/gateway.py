"""HTTP client for the Midtrans Snap transaction API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from topup_server.core.config import MidtransSettings

from .exceptions import GatewayNotConfiguredError, GatewayUnavailableError
from .models import SnapTransaction

logger = logging.getLogger(__name__)

SNAP_TRANSACTIONS_PATH = "/snap/v1/transactions"


class MidtransSnapClient:
    def __init__(
        self,
        server_key: Optional[str],
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.server_key = server_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: MidtransSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "MidtransSnapClient":
        return cls(
            server_key=settings.server_key,
            base_url=settings.snap_base_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def create_transaction(self, parameter: dict[str, Any]) -> SnapTransaction:
        if not self.server_key:
            raise GatewayNotConfiguredError("Midtrans server key is not configured")

        order_id = parameter.get("transaction_details", {}).get("order_id")
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                auth=(self.server_key, ""),
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post(SNAP_TRANSACTIONS_PATH, json=parameter)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Snap rejected order %s: %s %s",
                order_id,
                exc.response.status_code,
                exc.response.text,
            )
            raise GatewayUnavailableError(f"Gateway returned {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Snap request for order %s failed: %s", order_id, exc)
            raise GatewayUnavailableError("Failed to create transaction") from exc

        token = data.get("token") if isinstance(data, dict) else None
        redirect_url = data.get("redirect_url") if isinstance(data, dict) else None
        if not token or not redirect_url:
            logger.error("Snap response for order %s lacks token: %s", order_id, data)
            raise GatewayUnavailableError("Gateway response missing token")
        return SnapTransaction(token=token, redirect_url=redirect_url)
