"""Workflow API: thin routes delegating to WorkflowRepository and WorkflowEngine."""

from typing import Annotated

import httpx
from fastapi import APIRouter, BackgroundTasks, Depends, Query

from app.api.v1.dependencies import (
    dispatch_event_in_background,
    get_http_client,
    get_workflow_engine,
    get_workflow_repo,
    get_workflow_repo_for_write,
)
from app.application.dtos.workflow import WorkflowDefinition, WorkflowTemplate
from app.application.services.workflow_templates import list_workflow_templates
from app.infrastructure.persistence.repositories.workflow_repo import WorkflowRepository
from app.infrastructure.services.workflow_engine import WorkflowEngine
from app.schemas.workflow import (
    EventAcceptedResponse,
    ExecuteWorkflowRequest,
    TriggerEventRequest,
    WorkflowCreateRequest,
    WorkflowExecutionLogResponse,
)

router = APIRouter()


@router.get("/templates", response_model=list[WorkflowTemplate])
async def get_workflow_templates() -> list[WorkflowTemplate]:
    """Built-in workflow templates users can adopt."""
    return list_workflow_templates()


@router.get("", response_model=list[WorkflowDefinition])
async def list_workflows(
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    include_disabled: bool = True,
) -> list[WorkflowDefinition]:
    """Stored workflow definitions."""
    return await workflow_repo.list_workflows(
        skip=skip, limit=limit, include_disabled=include_disabled
    )


@router.post("", response_model=WorkflowDefinition, status_code=201)
async def create_workflow(
    body: WorkflowCreateRequest,
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo_for_write)],
) -> WorkflowDefinition:
    """Store a workflow definition."""
    return await workflow_repo.create_workflow(body.to_definition())


@router.post("/execute", response_model=WorkflowExecutionLogResponse)
async def execute_workflow(
    body: ExecuteWorkflowRequest,
    engine: Annotated[WorkflowEngine, Depends(get_workflow_engine)],
) -> WorkflowExecutionLogResponse:
    """Run an inline definition once and return its execution log."""
    log = await engine.execute_workflow(body.workflow, body.trigger_data, body.user_id)
    return WorkflowExecutionLogResponse.model_validate(log)


@router.post("/trigger", response_model=list[WorkflowExecutionLogResponse])
async def trigger_workflows(
    body: TriggerEventRequest,
    engine: Annotated[WorkflowEngine, Depends(get_workflow_engine)],
) -> list[WorkflowExecutionLogResponse]:
    """Dispatch an event to matching enabled workflows and return their logs."""
    logs = await engine.trigger_workflows(body.event_type, body.event_data, body.user_id)
    return [WorkflowExecutionLogResponse.model_validate(log) for log in logs]


@router.post("/events", response_model=EventAcceptedResponse, status_code=202)
async def publish_event(
    body: TriggerEventRequest,
    background_tasks: BackgroundTasks,
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> EventAcceptedResponse:
    """Fire-and-forget: workflows run after the response is sent."""
    background_tasks.add_task(
        dispatch_event_in_background,
        http_client,
        body.event_type.value,
        body.event_data,
        body.user_id,
    )
    return EventAcceptedResponse(event_type=body.event_type)
