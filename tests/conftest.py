"""Pytest configuration and fixtures for the workflow service.

HTTP tests run the FastAPI app over ASGITransport with dependency overrides.
Repository tests use an in-memory SQLite database (aiosqlite). Action and
engine tests use AsyncMock collaborators and an httpx.MockTransport for
outbound webhooks.
"""

import os

# SQL is optional: unit and API tests must not depend on a local .env.
os.environ.setdefault("DATABASE_URL", "")
os.environ.setdefault("EMAIL_PROVIDER", "log")

from collections.abc import AsyncIterator, Iterator
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.infrastructure.persistence.models  # noqa: F401  registers tables on Base
from app.infrastructure.persistence.database import Base
from app.infrastructure.services.workflow_actions import ActionDispatcher
from app.main import create_app

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


class WebhookRecorder:
    """httpx.MockTransport handler that records requests and answers status_code."""

    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"received": True})


@pytest.fixture
def webhook_recorder() -> WebhookRecorder:
    return WebhookRecorder()


@pytest.fixture
async def http_client(webhook_recorder: WebhookRecorder) -> AsyncIterator[httpx.AsyncClient]:
    """httpx client whose requests never leave the process."""
    transport = httpx.MockTransport(webhook_recorder.handler)
    async with httpx.AsyncClient(transport=transport) as client:
        yield client


@pytest.fixture
def collaborators() -> SimpleNamespace:
    """AsyncMock email sender, notification creator, project and comment stores."""
    email_sender = AsyncMock()
    email_sender.send_template_email.return_value = True
    return SimpleNamespace(
        email_sender=email_sender,
        notification_creator=AsyncMock(),
        project_store=AsyncMock(),
        comment_store=AsyncMock(),
    )


@pytest.fixture
def dispatcher(
    collaborators: SimpleNamespace, http_client: httpx.AsyncClient
) -> ActionDispatcher:
    return ActionDispatcher(
        email_sender=collaborators.email_sender,
        notification_creator=collaborators.notification_creator,
        project_store=collaborators.project_store,
        comment_store=collaborators.comment_store,
        http_client=http_client,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def test_app() -> Iterator[FastAPI]:
    """Fresh app per test so dependency_overrides never leak."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Session on a fresh in-memory SQLite database with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    # pysqlite defers BEGIN itself, which breaks SAVEPOINT; emit BEGIN explicitly.
    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()
