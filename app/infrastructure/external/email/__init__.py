"""Outbound email: transport protocol, factory and providers."""

from app.infrastructure.external.email.factory import EmailTransportFactory
from app.infrastructure.external.email.protocols import IEmailTransport, OutboundEmail

__all__ = [
    "EmailTransportFactory",
    "IEmailTransport",
    "OutboundEmail",
]
