"""DTOs for workflow definitions and execution logs (no dependency on ORM).

Definitions are pydantic models: they arrive as JSON from storage or the
API and are validated once. Execution logs are plain dataclasses built
and finalized by the workflow engine during a single run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.shared.enums import (
    ActionExecutionStatus,
    ConditionOperator,
    ScheduleType,
    WorkflowActionType,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
)
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid


class _DefinitionModel(BaseModel):
    """Accepts snake_case or the camelCase keys used by stored definitions."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkflowCondition(_DefinitionModel):
    """Single predicate on event data. Unknown operators are kept as strings and fail closed."""

    field: str = Field(..., min_length=1)
    operator: ConditionOperator | str = Field(..., union_mode="left_to_right")
    value: Any = None


class WorkflowSchedule(_DefinitionModel):
    """Cadence for SCHEDULE triggers. day_of_week: 0 = Sunday."""

    type: ScheduleType
    time: str | None = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    day_of_month: int | None = Field(default=None, ge=1, le=31)


class WorkflowTrigger(_DefinitionModel):
    """Event type plus optional conditions (all must hold) and schedule."""

    type: WorkflowTriggerType
    conditions: list[WorkflowCondition] | None = None
    schedule: WorkflowSchedule | None = None


class WorkflowAction(_DefinitionModel):
    """One side effect. config values may contain {{path}} template tokens; delay is in minutes."""

    type: WorkflowActionType | str = Field(..., union_mode="left_to_right")
    config: dict[str, Any] = Field(default_factory=dict)
    delay: float | None = Field(default=None, ge=0)


class WorkflowDefinition(_DefinitionModel):
    """Named, enable-able rule: one trigger and an ordered list of actions."""

    id: str = Field(default_factory=generate_cuid)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    enabled: bool = True
    trigger: WorkflowTrigger
    actions: list[WorkflowAction] = Field(default_factory=list)
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped


@dataclass(frozen=True)
class ActionResult:
    """Outcome of dispatching one action. error is set only on failure."""

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> ActionResult:
        return cls(success=True)

    @classmethod
    def failed(cls, error: str | None) -> ActionResult:
        return cls(success=False, error=error)


@dataclass
class ExecutedAction:
    """Log entry for one dispatched action."""

    action: str
    status: ActionExecutionStatus
    executed_at: datetime
    error: str | None = None


@dataclass
class WorkflowExecutionLog:
    """Audit record of one workflow run. Starts PENDING; terminal before execute_workflow returns."""

    workflow_id: str
    triggered_by: str
    trigger_data: dict[str, Any]
    id: str = field(default_factory=generate_cuid)
    status: WorkflowExecutionStatus = WorkflowExecutionStatus.PENDING
    executed_actions: list[ExecutedAction] = field(default_factory=list)
    started_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status != WorkflowExecutionStatus.PENDING

    def finish(
        self, status: WorkflowExecutionStatus, error: str | None = None
    ) -> None:
        """Set the terminal status (and error, if any) and stamp completed_at."""
        self.status = status
        if error is not None:
            self.error = error
        self.completed_at = utc_now()


class WorkflowTemplate(_DefinitionModel):
    """Predefined workflow blueprint; becomes a WorkflowDefinition when adopted."""

    key: str
    name: str
    description: str | None = None
    trigger: WorkflowTrigger
    actions: list[WorkflowAction]

    def to_definition(
        self, created_by: str | None = None, *, enabled: bool = True
    ) -> WorkflowDefinition:
        now = utc_now()
        return WorkflowDefinition(
            name=self.name,
            description=self.description,
            enabled=enabled,
            trigger=self.trigger.model_copy(deep=True),
            actions=[a.model_copy(deep=True) for a in self.actions],
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
