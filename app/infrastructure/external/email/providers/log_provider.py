"""Development transport: logs the message instead of delivering it."""

from app.infrastructure.external.email.protocols import OutboundEmail
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LogEmailTransport:
    """Email transport that only logs. Every send is reported as delivered."""

    name = "log"

    async def send(self, message: OutboundEmail) -> str | None:
        logger.info(
            "Email (development mode): to=%s subject=%r from=%s html_length=%d",
            ", ".join(message.to_addresses),
            message.subject[:80],
            message.from_address,
            len(message.html),
        )
        return None
