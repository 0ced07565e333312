"""Email transport factory: creates the log, Resend or SendGrid transport from settings."""

from collections.abc import Callable
from typing import ClassVar

import httpx

from app.core.config import Settings
from app.infrastructure.external.email.protocols import IEmailTransport
from app.infrastructure.external.email.providers.log_provider import LogEmailTransport
from app.infrastructure.external.email.providers.resend_provider import (
    ResendEmailTransport,
)
from app.infrastructure.external.email.providers.sendgrid_provider import (
    SendGridEmailTransport,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

TransportBuilder = Callable[[Settings, httpx.AsyncClient], IEmailTransport]


def _build_log(settings: Settings, http_client: httpx.AsyncClient) -> IEmailTransport:
    return LogEmailTransport()


def _build_resend(settings: Settings, http_client: httpx.AsyncClient) -> IEmailTransport:
    assert settings.resend_api_key is not None
    return ResendEmailTransport(http_client, settings.resend_api_key.get_secret_value())


def _build_sendgrid(
    settings: Settings, http_client: httpx.AsyncClient
) -> IEmailTransport:
    assert settings.sendgrid_api_key is not None
    return SendGridEmailTransport(
        http_client, settings.sendgrid_api_key.get_secret_value()
    )


class EmailTransportFactory:
    """Factory for email transports keyed by settings.email_provider."""

    _transports: ClassVar[dict[str, TransportBuilder]] = {
        "log": _build_log,
        "resend": _build_resend,
        "sendgrid": _build_sendgrid,
    }

    @classmethod
    def create_transport(
        cls, settings: Settings, http_client: httpx.AsyncClient
    ) -> IEmailTransport:
        """Create the configured transport.

        Args:
            settings: Application settings (email_provider and API keys).
            http_client: Shared httpx.AsyncClient for provider API calls.

        Raises:
            ValueError: If email_provider is not supported.
        """
        provider = settings.email_provider.lower()
        builder = cls._transports.get(provider)
        if builder is None:
            raise ValueError(
                f"Unsupported email provider: {settings.email_provider}. "
                f"Supported: {list(cls._transports.keys())}"
            )
        logger.debug("Creating %s email transport", provider)
        return builder(settings, http_client)

    @classmethod
    def register_transport(cls, provider: str, builder: TransportBuilder) -> None:
        """Register a custom transport builder."""
        cls._transports[provider.lower()] = builder
        logger.info("Registered custom email transport: %s", provider)

    @classmethod
    def list_supported_transports(cls) -> list[str]:
        return list(cls._transports.keys())
