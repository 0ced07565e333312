"""Workflow API schemas (camelCase on the wire, like stored definitions)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.application.dtos.workflow import (
    WorkflowAction,
    WorkflowDefinition,
    WorkflowTrigger,
)
from app.shared.enums import (
    ActionExecutionStatus,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
)


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class WorkflowCreateRequest(_ApiModel):
    """Request body for storing a workflow definition."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    enabled: bool = True
    trigger: WorkflowTrigger
    actions: list[WorkflowAction] = Field(..., min_length=1)
    created_by: str | None = None

    def to_definition(self) -> WorkflowDefinition:
        return WorkflowDefinition(
            name=self.name,
            description=self.description,
            enabled=self.enabled,
            trigger=self.trigger,
            actions=self.actions,
            created_by=self.created_by,
        )


class ExecuteWorkflowRequest(_ApiModel):
    """Run an inline definition once against trigger_data."""

    workflow: WorkflowDefinition
    trigger_data: dict[str, Any] = Field(default_factory=dict)
    user_id: str = Field(..., min_length=1)


class TriggerEventRequest(_ApiModel):
    """Dispatch a domain event to every enabled matching workflow."""

    event_type: WorkflowTriggerType
    event_data: dict[str, Any] = Field(default_factory=dict)
    user_id: str = Field(..., min_length=1)


class ExecutedActionResponse(_ApiModel):
    action: str
    status: ActionExecutionStatus
    error: str | None = None
    executed_at: datetime


class WorkflowExecutionLogResponse(_ApiModel):
    """Execution log of one workflow run."""

    id: str
    workflow_id: str
    triggered_by: str
    trigger_data: dict[str, Any]
    status: WorkflowExecutionStatus
    executed_actions: list[ExecutedActionResponse]
    started_at: datetime
    completed_at: datetime | None = None
    error: str | None = None


class EventAcceptedResponse(_ApiModel):
    """Response for POST /workflows/events (dispatch runs after the response)."""

    status: str = "accepted"
    event_type: WorkflowTriggerType
