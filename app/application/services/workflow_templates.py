"""Built-in workflow templates.

Blueprints users can adopt as workflow definitions. Stored in the same
camelCase JSON shape as persisted definitions and validated on load.
"""

from functools import lru_cache
from typing import Any

from app.application.dtos.workflow import WorkflowTemplate

_TEMPLATES: list[dict[str, Any]] = [
    {
        "key": "welcome_new_project",
        "name": "Welcome New Project",
        "description": "Send welcome email when a new project is created",
        "trigger": {"type": "PROJECT_CREATED"},
        "actions": [
            {
                "type": "SEND_EMAIL",
                "config": {
                    "template": "projectAssigned",
                    "to": "{{leadStrategist.email}}",
                },
            },
            {
                "type": "SEND_NOTIFICATION",
                "config": {
                    "type": "PROJECT_ASSIGNED",
                    "userId": "{{leadStrategist.id}}",
                    "message": "You have been assigned to {{projectName}}",
                },
            },
        ],
    },
    {
        "key": "approval_due_date_reminder",
        "name": "Approval Due Date Reminder",
        "description": "Remind reviewers when approval due date is approaching",
        "trigger": {
            "type": "DUE_DATE_APPROACHING",
            "conditions": [
                {"field": "type", "operator": "EQUALS", "value": "APPROVAL"},
                {"field": "daysUntilDue", "operator": "EQUALS", "value": 2},
            ],
        },
        "actions": [
            {
                "type": "SEND_EMAIL",
                "config": {
                    "template": "approvalRequested",
                    "to": "{{reviewers[].email}}",
                },
            },
            {
                "type": "SEND_NOTIFICATION",
                "config": {
                    "type": "APPROVAL_DUE_SOON",
                    "userId": "{{reviewers[].id}}",
                    "message": "Approval for {{projectName}} is due in {{daysUntilDue}} days",
                },
            },
        ],
    },
    {
        "key": "phase_completion_celebration",
        "name": "Phase Completion Celebration",
        "description": "Celebrate when a major phase is completed",
        "trigger": {
            "type": "PHASE_COMPLETED",
            "conditions": [
                {
                    "field": "phaseName",
                    "operator": "IN",
                    "value": ["LAUNCH", "PRODUCT_DEV", "BRANDING"],
                },
            ],
        },
        "actions": [
            {
                "type": "SEND_EMAIL",
                "config": {
                    "template": "phaseCompleted",
                    "to": "{{project.leadStrategist.email}}",
                },
            },
            {
                "type": "ADD_COMMENT",
                "config": {
                    "text": "🎉 Congratulations on completing the {{phaseName}} phase!",
                },
            },
        ],
    },
    {
        "key": "status_change_notification",
        "name": "Status Change Notification",
        "description": "Notify team when project status changes",
        "trigger": {"type": "PROJECT_STATUS_CHANGED"},
        "actions": [
            {
                "type": "SEND_NOTIFICATION",
                "config": {
                    "type": "PROJECT_STATUS_CHANGED",
                    "userId": "{{project.leadStrategist.id}}",
                    "message": "{{projectName}} moved to {{newStatus}}",
                },
            },
            {
                "type": "SEND_EMAIL",
                "config": {
                    "template": "projectStatusChanged",
                    "to": "{{project.leadStrategist.email}}",
                },
            },
        ],
    },
    {
        "key": "weekly_project_digest",
        "name": "Weekly Project Digest",
        "description": "Send weekly summary of active projects",
        "trigger": {
            "type": "SCHEDULE",
            "schedule": {"type": "WEEKLY", "dayOfWeek": 1, "time": "09:00"},
        },
        "actions": [
            {
                "type": "SEND_EMAIL",
                "config": {"template": "weeklyDigest", "to": "{{user.email}}"},
            },
        ],
    },
    {
        "key": "auto_assign_admin_on_create",
        "name": "Auto-assign to Admin on Create",
        "description": "Automatically assign new projects to admin if no lead specified",
        "trigger": {
            "type": "PROJECT_CREATED",
            "conditions": [
                {"field": "leadStrategistId", "operator": "EQUALS", "value": None},
            ],
        },
        "actions": [
            {
                "type": "ASSIGN_USER",
                "config": {"role": "ADMIN", "field": "leadStrategist"},
            },
            {
                "type": "SEND_NOTIFICATION",
                "config": {
                    "type": "PROJECT_ASSIGNED",
                    "userId": "{{assignedUser.id}}",
                    "message": "You have been assigned to {{projectName}}",
                },
            },
        ],
    },
]


@lru_cache
def _load_templates() -> tuple[WorkflowTemplate, ...]:
    return tuple(WorkflowTemplate.model_validate(t) for t in _TEMPLATES)


def list_workflow_templates() -> list[WorkflowTemplate]:
    """Return all built-in templates (validated once, copied per call)."""
    return [t.model_copy(deep=True) for t in _load_templates()]


def get_workflow_template(key: str) -> WorkflowTemplate | None:
    """Return the template with the given key, or None."""
    for template in _load_templates():
        if template.key == key:
            return template.model_copy(deep=True)
    return None
