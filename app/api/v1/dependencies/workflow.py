"""Workflow repository and engine dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated, Any

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.services import IWorkflowDefinitionSource
from app.core.config import Settings, get_settings
from app.infrastructure.external.email import EmailTransportFactory
from app.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    session_scope,
)
from app.infrastructure.persistence.repositories import (
    CommentRepository,
    NotificationRepository,
    ProjectRepository,
    WorkflowRepository,
)
from app.infrastructure.services import (
    ActionDispatcher,
    EmailService,
    NotificationService,
    WorkflowEngine,
    trigger_workflow,
)
from app.shared.telemetry.logging import get_logger

from .db import get_http_client

logger = get_logger(__name__)


async def get_workflow_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowRepository:
    """Workflow repository for read operations (list)."""
    return WorkflowRepository(db)


async def get_workflow_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> WorkflowRepository:
    """Workflow repository for create (transactional)."""
    return WorkflowRepository(db)


def build_workflow_engine(
    db: AsyncSession,
    http_client: httpx.AsyncClient,
    settings: Settings,
    *,
    definition_source: IWorkflowDefinitionSource | None = None,
) -> WorkflowEngine:
    """Assemble the engine with SQL-backed stores sharing one session.

    Matching workflows run one at a time because an AsyncSession does not
    allow concurrent operations.
    """
    email_service = EmailService(
        EmailTransportFactory.create_transport(settings, http_client),
        from_address=settings.email_from,
    )
    dispatcher = ActionDispatcher(
        email_sender=email_service,
        notification_creator=NotificationService(NotificationRepository(db)),
        project_store=ProjectRepository(db),
        comment_store=CommentRepository(db),
        http_client=http_client,
        default_email_subject=settings.email_default_subject,
        webhook_timeout_seconds=settings.webhook_timeout_seconds,
        webhook_user_agent=settings.webhook_user_agent,
    )
    return WorkflowEngine(
        dispatcher,
        definition_source or WorkflowRepository(db),
        delay_unit_seconds=settings.workflow_delay_unit_seconds,
        max_concurrency=1,
    )


async def get_workflow_engine(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> WorkflowEngine:
    """Engine bound to the request transaction (execute and trigger endpoints)."""
    return build_workflow_engine(db, http_client, settings)


async def dispatch_event_in_background(
    http_client: httpx.AsyncClient,
    event_type: str,
    event_data: dict[str, Any],
    user_id: str,
) -> None:
    """Background task for POST /workflows/events: own session, never raises."""
    try:
        async with session_scope() as db:
            engine = build_workflow_engine(db, http_client, get_settings())
            await trigger_workflow(engine, event_type, event_data, user_id)
    except Exception:
        logger.exception("Background workflow dispatch failed for %s", event_type)
