"""Shared enumerations for workflow automation.

Cross-cutting enums used by application, infrastructure and API layers
(trigger and action kinds, condition operators, execution status).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowTriggerType(_ValuesMixin, str, Enum):
    """Domain event kinds that can fire a workflow."""

    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_STATUS_CHANGED = "PROJECT_STATUS_CHANGED"
    PROJECT_ASSIGNED = "PROJECT_ASSIGNED"
    APPROVAL_REQUESTED = "APPROVAL_REQUESTED"
    APPROVAL_APPROVED = "APPROVAL_APPROVED"
    APPROVAL_REJECTED = "APPROVAL_REJECTED"
    PHASE_COMPLETED = "PHASE_COMPLETED"
    COMMENT_ADDED = "COMMENT_ADDED"
    FILE_UPLOADED = "FILE_UPLOADED"
    DUE_DATE_APPROACHING = "DUE_DATE_APPROACHING"
    SCHEDULE = "SCHEDULE"
    WEBHOOK = "WEBHOOK"


class WorkflowActionType(_ValuesMixin, str, Enum):
    """Side effects a workflow action can perform."""

    SEND_EMAIL = "SEND_EMAIL"
    SEND_NOTIFICATION = "SEND_NOTIFICATION"
    UPDATE_STATUS = "UPDATE_STATUS"
    ASSIGN_USER = "ASSIGN_USER"
    CREATE_TASK = "CREATE_TASK"
    SEND_WEBHOOK = "SEND_WEBHOOK"
    UPDATE_FIELD = "UPDATE_FIELD"
    ADD_COMMENT = "ADD_COMMENT"


class ConditionOperator(_ValuesMixin, str, Enum):
    """Comparison operators for trigger conditions."""

    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"
    IN = "IN"
    NOT_IN = "NOT_IN"


class ScheduleType(_ValuesMixin, str, Enum):
    """Cadence of a SCHEDULE trigger."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class WorkflowExecutionStatus(_ValuesMixin, str, Enum):
    """Workflow execution lifecycle status."""

    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ActionExecutionStatus(_ValuesMixin, str, Enum):
    """Outcome of a single executed action."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class NotificationType(_ValuesMixin, str, Enum):
    """In-app notification kinds."""

    APPROVAL_REQUEST = "APPROVAL_REQUEST"
    APPROVAL_APPROVED = "APPROVAL_APPROVED"
    APPROVAL_CHANGES_REQUESTED = "APPROVAL_CHANGES_REQUESTED"
    APPROVAL_DUE_SOON = "APPROVAL_DUE_SOON"
    COMMENT_MENTION = "COMMENT_MENTION"
    COMMENT_REPLY = "COMMENT_REPLY"
    PROJECT_STATUS_CHANGED = "PROJECT_STATUS_CHANGED"
    PROJECT_ASSIGNED = "PROJECT_ASSIGNED"
    PHASE_COMPLETED = "PHASE_COMPLETED"
    FILE_UPLOADED = "FILE_UPLOADED"
    DEADLINE_APPROACHING = "DEADLINE_APPROACHING"
    TEAM_MEMBER_ADDED = "TEAM_MEMBER_ADDED"
