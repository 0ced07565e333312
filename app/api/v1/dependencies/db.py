"""Shared infrastructure dependencies (HTTP client owned by the lifespan)."""

from __future__ import annotations

import httpx
from fastapi import Request


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared httpx.AsyncClient created in lifespan (webhooks and email APIs)."""
    return request.app.state.http_client
