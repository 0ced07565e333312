"""Shared utilities: datetime and id generators."""

from app.shared.utils.datetime import ensure_utc, to_iso_utc, utc_now
from app.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "to_iso_utc",
]
