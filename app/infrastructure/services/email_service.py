"""Email service: renders a template and delivers it through the configured transport."""

from __future__ import annotations

from typing import Any

from app.infrastructure.external.email.protocols import IEmailTransport, OutboundEmail
from app.infrastructure.services.email_template_renderer import EmailTemplateRenderer
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def normalize_recipients(to: str | list[str] | None) -> list[str]:
    """Split comma-separated strings and drop blanks. Order is kept, duplicates removed."""
    if to is None:
        return []
    raw = [to] if isinstance(to, str) else list(to)
    recipients: list[str] = []
    for item in raw:
        for part in str(item).split(","):
            addr = part.strip()
            if addr and addr not in recipients:
                recipients.append(addr)
    return recipients


class EmailService:
    """IEmailSender implementation. Failures are logged and reported as False."""

    def __init__(
        self,
        transport: IEmailTransport,
        *,
        from_address: str,
        renderer: EmailTemplateRenderer | None = None,
    ) -> None:
        self._transport = transport
        self._from_address = from_address
        self._renderer = renderer or EmailTemplateRenderer()

    async def send_template_email(
        self,
        to: str | list[str] | None,
        template: str,
        data: dict[str, Any],
        subject: str,
    ) -> bool:
        """Render template with data and send to every recipient in to."""
        recipients = normalize_recipients(to)
        if not recipients:
            logger.warning("Email %r skipped: no recipients", template)
            return False
        try:
            html = self._renderer.render(template, data)
            message_id = await self._transport.send(
                OutboundEmail(
                    from_address=self._from_address,
                    to_addresses=recipients,
                    subject=subject,
                    html=html,
                )
            )
        except Exception:
            logger.exception(
                "Failed to send template email %r via %s",
                template,
                self._transport.name,
            )
            return False
        logger.debug(
            "Email %r sent to %d recipients (message_id=%s)",
            template,
            len(recipients),
            message_id,
        )
        return True
