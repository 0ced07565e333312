"""Outbound webhook payloads and HMAC-SHA256 signatures."""

from __future__ import annotations

import hashlib
import hmac
import json
from datetime import datetime
from typing import Any

from app.shared.utils.datetime import to_iso_utc, utc_now


def serialize_payload(data: Any) -> str:
    """Compact JSON; values json cannot encode (datetimes, ids) fall back to str()."""
    return json.dumps(data, separators=(",", ":"), default=str, ensure_ascii=False)


def build_webhook_body(
    data: dict[str, Any], *, now: datetime | None = None
) -> dict[str, Any]:
    """Body sent by SEND_WEBHOOK: the event type, the full event data and a timestamp."""
    return {
        "event": data.get("eventType"),
        "data": data,
        "timestamp": to_iso_utc(now or utc_now()),
    }


def generate_webhook_signature(payload: str, secret: str) -> str:
    """Hex HMAC-SHA256 of the exact payload string."""
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def verify_webhook_signature(payload: str, signature: str, secret: str) -> bool:
    """Constant-time check of a received X-Webhook-Signature against payload."""
    expected = generate_webhook_signature(payload, secret)
    return hmac.compare_digest(signature.encode(), expected.encode())
