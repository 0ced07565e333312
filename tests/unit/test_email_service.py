"""Tests for email rendering, the EmailService and the HTTP email transports."""

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import httpx
import pytest

from app.core.config import Settings
from app.domain.exceptions import EmailDeliveryException, EmailTemplateNotFoundException
from app.infrastructure.external.email import EmailTransportFactory, OutboundEmail
from app.infrastructure.external.email.providers.log_provider import LogEmailTransport
from app.infrastructure.external.email.providers.resend_provider import (
    RESEND_API_URL,
    ResendEmailTransport,
)
from app.infrastructure.external.email.providers.sendgrid_provider import (
    SENDGRID_API_URL,
    SendGridEmailTransport,
)
from app.infrastructure.services.email_service import EmailService, normalize_recipients
from app.infrastructure.services.email_template_renderer import EmailTemplateRenderer


def _message(**overrides) -> OutboundEmail:
    fields = {
        "from_address": "studio@test.com",
        "to_addresses": ["a@x.com", "b@x.com"],
        "subject": "Hello",
        "html": "<p>Hi</p>",
    }
    fields.update(overrides)
    return OutboundEmail(**fields)


# --- renderer ---


def test_renderer_knows_every_built_in_template() -> None:
    renderer = EmailTemplateRenderer()
    assert set(renderer.template_keys) == {
        "projectAssigned",
        "approvalRequested",
        "approvalApproved",
        "approvalChangesRequested",
        "projectStatusChanged",
        "commentMentioned",
        "phaseCompleted",
        "projectLaunched",
        "weeklyDigest",
    }


def test_render_wraps_content_in_layout_and_escapes() -> None:
    html = EmailTemplateRenderer().render(
        "approvalRequested",
        {
            "projectName": "<Glow>",
            "recipientName": "Ana",
            "dueDate": datetime(2025, 3, 5, tzinfo=UTC),
            "actionUrl": "https://app.test/p1",
        },
    )
    assert "&lt;Glow&gt;" in html
    assert "<Glow>" not in html
    assert "Hi Ana," in html
    assert "March 5, 2025" in html
    assert "Review Now" in html
    assert f"&copy; {datetime.now(UTC).year} WaveLaunch Studio" in html


def test_status_change_humanizes_statuses() -> None:
    html = EmailTemplateRenderer().render(
        "projectStatusChanged",
        {"projectName": "Glow", "oldStatus": "IN_REVIEW", "newStatus": "READY_TO_LAUNCH"},
    )
    assert "IN REVIEW" in html
    assert "READY TO LAUNCH" in html


def test_comment_mention_truncates_long_text() -> None:
    html = EmailTemplateRenderer().render(
        "commentMentioned", {"authorName": "Ana", "projectName": "Glow", "commentText": "x" * 500}
    )
    assert "x" * 200 + "..." in html
    assert "x" * 201 not in html


def test_render_unknown_template_raises() -> None:
    with pytest.raises(EmailTemplateNotFoundException) as exc_info:
        EmailTemplateRenderer().render("missing", {})
    assert exc_info.value.details == {"template": "missing"}


# --- EmailService ---


def test_normalize_recipients() -> None:
    assert normalize_recipients("a@x.com, b@x.com,,a@x.com") == ["a@x.com", "b@x.com"]
    assert normalize_recipients(["a@x.com", " c@x.com "]) == ["a@x.com", "c@x.com"]
    assert normalize_recipients(None) == []


async def test_send_template_email_delivers_rendered_html() -> None:
    transport = AsyncMock()
    transport.name = "mock"
    service = EmailService(transport, from_address="studio@test.com")

    sent = await service.send_template_email(
        "a@x.com, b@x.com", "weeklyDigest", {"projectsCount": 4}, "Digest"
    )

    assert sent is True
    (message,) = transport.send.await_args.args
    assert message.to_addresses == ["a@x.com", "b@x.com"]
    assert message.subject == "Digest"
    assert message.from_address == "studio@test.com"
    assert "<strong>4</strong> active projects" in message.html


async def test_send_without_recipients_returns_false() -> None:
    transport = AsyncMock()
    service = EmailService(transport, from_address="studio@test.com")
    assert await service.send_template_email(" , ", "weeklyDigest", {}, "s") is False
    assert await service.send_template_email(None, "weeklyDigest", {}, "s") is False
    transport.send.assert_not_awaited()


async def test_unknown_template_returns_false_without_sending() -> None:
    transport = AsyncMock()
    transport.name = "mock"
    service = EmailService(transport, from_address="studio@test.com")
    assert await service.send_template_email("a@x.com", "nope", {}, "s") is False
    transport.send.assert_not_awaited()


async def test_transport_error_returns_false() -> None:
    transport = AsyncMock()
    transport.name = "mock"
    transport.send.side_effect = EmailDeliveryException("mock", "HTTP 500")
    service = EmailService(transport, from_address="studio@test.com")
    assert await service.send_template_email("a@x.com", "weeklyDigest", {}, "s") is False


# --- transports ---


async def test_resend_transport_posts_message() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "re_123"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        message_id = await ResendEmailTransport(client, "key_1").send(_message(text="Hi"))

    assert message_id == "re_123"
    (request,) = seen
    assert str(request.url) == RESEND_API_URL
    assert request.headers["authorization"] == "Bearer key_1"
    assert json.loads(request.content) == {
        "from": "studio@test.com",
        "to": ["a@x.com", "b@x.com"],
        "subject": "Hello",
        "html": "<p>Hi</p>",
        "text": "Hi",
    }


async def test_resend_transport_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, text="invalid from")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(EmailDeliveryException) as exc_info:
            await ResendEmailTransport(client, "key_1").send(_message())
    assert "HTTP 422" in exc_info.value.message


async def test_sendgrid_transport_uses_personalizations() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202, headers={"X-Message-Id": "sg_1"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        message_id = await SendGridEmailTransport(client, "key_2").send(_message())

    assert message_id == "sg_1"
    (request,) = seen
    assert str(request.url) == SENDGRID_API_URL
    body = json.loads(request.content)
    assert body["personalizations"] == [{"to": [{"email": "a@x.com"}, {"email": "b@x.com"}]}]
    assert body["from"] == {"email": "studio@test.com"}
    assert body["content"] == [{"type": "text/html", "value": "<p>Hi</p>"}]


async def test_log_transport_returns_no_id() -> None:
    assert await LogEmailTransport().send(_message()) is None


# --- factory ---


async def test_factory_builds_configured_transport() -> None:
    async with httpx.AsyncClient() as client:
        log = EmailTransportFactory.create_transport(Settings(email_provider="log"), client)
        resend = EmailTransportFactory.create_transport(
            Settings(email_provider="resend", resend_api_key="k"), client
        )
        sendgrid = EmailTransportFactory.create_transport(
            Settings(email_provider="SendGrid", sendgrid_api_key="k"), client
        )
    assert (log.name, resend.name, sendgrid.name) == ("log", "resend", "sendgrid")


def test_settings_reject_provider_without_key() -> None:
    with pytest.raises(ValueError, match="RESEND_API_KEY"):
        Settings(email_provider="resend", resend_api_key=None)


def test_supported_transports() -> None:
    assert set(EmailTransportFactory.list_supported_transports()) >= {"log", "resend", "sendgrid"}
