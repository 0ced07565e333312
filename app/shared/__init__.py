"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.enums import (
    ActionExecutionStatus,
    ConditionOperator,
    NotificationType,
    ScheduleType,
    WorkflowActionType,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
)
from app.shared.utils import (
    ensure_utc,
    generate_cuid,
    to_iso_utc,
    utc_now,
)

__all__ = [
    "ActionExecutionStatus",
    "ConditionOperator",
    "NotificationType",
    "ScheduleType",
    "WorkflowActionType",
    "WorkflowExecutionStatus",
    "WorkflowTriggerType",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "to_iso_utc",
]
