"""Pydantic request/response schemas for the API."""

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.workflow import (
    EventAcceptedResponse,
    ExecutedActionResponse,
    ExecuteWorkflowRequest,
    TriggerEventRequest,
    WorkflowCreateRequest,
    WorkflowExecutionLogResponse,
)

__all__ = [
    "EventAcceptedResponse",
    "ExecuteWorkflowRequest",
    "ExecutedActionResponse",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "TriggerEventRequest",
    "WorkflowCreateRequest",
    "WorkflowExecutionLogResponse",
]
