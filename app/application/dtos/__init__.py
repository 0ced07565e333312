"""Application DTOs (no ORM dependency)."""

from app.application.dtos.action_config import (
    ActionConfig,
    AddCommentConfig,
    AssignUserConfig,
    CreateTaskConfig,
    SendEmailConfig,
    SendNotificationConfig,
    SendWebhookConfig,
    UpdateFieldConfig,
    UpdateStatusConfig,
    parse_action_config,
)
from app.application.dtos.workflow import (
    ActionResult,
    ExecutedAction,
    WorkflowAction,
    WorkflowCondition,
    WorkflowDefinition,
    WorkflowExecutionLog,
    WorkflowSchedule,
    WorkflowTemplate,
    WorkflowTrigger,
)

__all__ = [
    "ActionConfig",
    "ActionResult",
    "AddCommentConfig",
    "AssignUserConfig",
    "CreateTaskConfig",
    "ExecutedAction",
    "SendEmailConfig",
    "SendNotificationConfig",
    "SendWebhookConfig",
    "UpdateFieldConfig",
    "UpdateStatusConfig",
    "WorkflowAction",
    "WorkflowCondition",
    "WorkflowDefinition",
    "WorkflowExecutionLog",
    "WorkflowSchedule",
    "WorkflowTemplate",
    "WorkflowTrigger",
    "parse_action_config",
]
