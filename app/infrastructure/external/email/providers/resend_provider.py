"""Resend transport over the Resend REST API."""

from __future__ import annotations

from typing import Any

import httpx

from app.domain.exceptions import EmailDeliveryException
from app.infrastructure.external.email.protocols import OutboundEmail
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailTransport:
    """Sends through POST /emails with a bearer API key."""

    name = "resend"

    def __init__(self, http_client: httpx.AsyncClient, api_key: str) -> None:
        self._client = http_client
        self._api_key = api_key

    async def send(self, message: OutboundEmail) -> str | None:
        body: dict[str, Any] = {
            "from": message.from_address,
            "to": message.to_addresses,
            "subject": message.subject,
            "html": message.html,
        }
        if message.text:
            body["text"] = message.text
        response = await self._client.post(
            RESEND_API_URL,
            json=body,
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        if response.is_error:
            raise EmailDeliveryException(
                self.name, f"HTTP {response.status_code}: {response.text[:200]}"
            )
        message_id = response.json().get("id")
        logger.info("Email sent via Resend: %s", message_id)
        return message_id
