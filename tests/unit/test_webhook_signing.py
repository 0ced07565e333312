"""Tests for outbound webhook bodies and HMAC signatures."""

import hashlib
import hmac
from datetime import UTC, datetime

from app.application.services.webhook_signing import (
    build_webhook_body,
    generate_webhook_signature,
    serialize_payload,
    verify_webhook_signature,
)


def test_build_webhook_body() -> None:
    data = {"eventType": "COMMENT_ADDED", "projectId": "p1"}
    body = build_webhook_body(data, now=datetime(2025, 1, 15, 12, 0, 0, 250000, tzinfo=UTC))
    assert body == {
        "event": "COMMENT_ADDED",
        "data": data,
        "timestamp": "2025-01-15T12:00:00.250Z",
    }


def test_body_event_is_none_without_event_type() -> None:
    assert build_webhook_body({})["event"] is None


def test_serialize_payload_is_compact_and_handles_datetimes() -> None:
    payload = serialize_payload({"a": 1, "at": datetime(2025, 1, 1, tzinfo=UTC), "name": "Café"})
    assert payload == '{"a":1,"at":"2025-01-01 00:00:00+00:00","name":"Café"}'


def test_signature_is_hex_hmac_sha256() -> None:
    payload = '{"event":"SCHEDULE"}'
    expected = hmac.new(b"secret", payload.encode(), hashlib.sha256).hexdigest()
    assert generate_webhook_signature(payload, "secret") == expected


def test_verify_signature() -> None:
    payload = '{"event":"SCHEDULE"}'
    signature = generate_webhook_signature(payload, "secret")
    assert verify_webhook_signature(payload, signature, "secret")
    assert not verify_webhook_signature(payload, signature, "other")
    assert not verify_webhook_signature(payload + " ", signature, "secret")
