"""Service interfaces (ports) for the application layer.

Protocols define the collaborators the workflow engine drives. Infrastructure
provides SQLAlchemy-, httpx- and jinja2-backed implementations; tests pass
AsyncMock fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.workflow import (
        WorkflowDefinition,
        WorkflowExecutionLog,
    )


class IEmailSender(Protocol):
    """Protocol for sending a templated email. Returns False on failure instead of raising."""

    async def send_template_email(
        self,
        to: str | list[str],
        template: str,
        data: dict[str, Any],
        subject: str,
    ) -> bool:
        """Render template with data and deliver to recipients."""


class INotificationCreator(Protocol):
    """Protocol for creating in-app notifications. May raise."""

    async def create_notification(
        self,
        user_id: str | None,
        type: str | None,
        message: str | None,
        project_id: str | None,
        triggered_by_id: str | None,
        *,
        title: str | None = None,
        action_url: str | None = None,
    ) -> None:
        """Create a notification for user_id (or each id of a comma-separated list)."""


class IProjectStore(Protocol):
    """Protocol for field-level project updates (status, assignee, arbitrary field)."""

    async def update_project(self, project_id: str, values: dict[str, Any]) -> None:
        """Set each key of values on the project. Raises on unknown project or field."""


class ICommentStore(Protocol):
    """Protocol for system-authored project comments."""

    async def create_system_comment(
        self, project_id: str, text: str | None, author_id: str
    ) -> None:
        """Create a comment flagged as system generated."""


class IWorkflowDefinitionSource(Protocol):
    """Protocol for looking up enabled workflow definitions (storage is opaque)."""

    async def get_enabled_workflows(self) -> list[WorkflowDefinition]:
        """Return all enabled workflow definitions."""


class IWorkflowEngine(Protocol):
    """Protocol for workflow execution triggered by domain events."""

    async def execute_workflow(
        self,
        workflow: WorkflowDefinition,
        trigger_data: dict[str, Any],
        user_id: str,
    ) -> WorkflowExecutionLog:
        """Run one workflow and return its finalized execution log."""

    async def trigger_workflows(
        self,
        event_type: str,
        event_data: dict[str, Any],
        user_id: str,
    ) -> list[WorkflowExecutionLog]:
        """Run every enabled workflow whose trigger matches event_type."""
