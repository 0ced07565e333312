"""SendGrid transport over the v3 mail/send API."""

from __future__ import annotations

from typing import Any

import httpx

from app.domain.exceptions import EmailDeliveryException
from app.infrastructure.external.email.protocols import OutboundEmail
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"


class SendGridEmailTransport:
    """Sends one personalization with every recipient. SendGrid answers 202 with no body."""

    name = "sendgrid"

    def __init__(self, http_client: httpx.AsyncClient, api_key: str) -> None:
        self._client = http_client
        self._api_key = api_key

    async def send(self, message: OutboundEmail) -> str | None:
        content: list[dict[str, str]] = []
        if message.text:
            content.append({"type": "text/plain", "value": message.text})
        content.append({"type": "text/html", "value": message.html})
        body: dict[str, Any] = {
            "personalizations": [
                {"to": [{"email": addr} for addr in message.to_addresses]}
            ],
            "from": {"email": message.from_address},
            "subject": message.subject,
            "content": content,
        }
        response = await self._client.post(
            SENDGRID_API_URL,
            json=body,
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        if response.is_error:
            raise EmailDeliveryException(
                self.name, f"HTTP {response.status_code}: {response.text[:200]}"
            )
        message_id = response.headers.get("X-Message-Id")
        logger.info("Email sent via SendGrid: %s", message_id)
        return message_id
