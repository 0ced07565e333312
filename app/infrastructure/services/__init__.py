"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.email_service import EmailService
from app.infrastructure.services.email_template_renderer import EmailTemplateRenderer
from app.infrastructure.services.notification_service import NotificationService
from app.infrastructure.services.workflow_actions import ActionDispatcher
from app.infrastructure.services.workflow_engine import (
    StaticWorkflowSource,
    WorkflowEngine,
    trigger_workflow,
)

__all__ = [
    "ActionDispatcher",
    "EmailService",
    "EmailTemplateRenderer",
    "NotificationService",
    "StaticWorkflowSource",
    "WorkflowEngine",
    "trigger_workflow",
]
