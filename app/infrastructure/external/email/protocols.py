"""Outbound email transport protocol and message structure (provider-agnostic)."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class OutboundEmail:
    """Rendered email ready for delivery."""

    from_address: str
    to_addresses: list[str]
    subject: str
    html: str
    text: str | None = None


class IEmailTransport(Protocol):
    """Delivers a rendered email. Raises EmailDeliveryException on provider errors."""

    @property
    def name(self) -> str:
        """Short provider name used in logs and errors."""
        ...

    async def send(self, message: OutboundEmail) -> str | None:
        """Deliver message; return the provider message id when one is reported."""
        ...
