"""Email transports: log-only, Resend, SendGrid."""

from app.infrastructure.external.email.providers.log_provider import LogEmailTransport
from app.infrastructure.external.email.providers.resend_provider import (
    ResendEmailTransport,
)
from app.infrastructure.external.email.providers.sendgrid_provider import (
    SendGridEmailTransport,
)

__all__ = [
    "LogEmailTransport",
    "ResendEmailTransport",
    "SendGridEmailTransport",
]
