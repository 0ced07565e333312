"""API tests for /api/v1/workflows (engine and repositories overridden)."""

from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from app.api.v1.dependencies import (
    get_http_client,
    get_workflow_engine,
    get_workflow_repo,
    get_workflow_repo_for_write,
)
from app.application.dtos.workflow import WorkflowDefinition
from app.infrastructure.services.workflow_engine import StaticWorkflowSource, WorkflowEngine

STATUS_WORKFLOW = {
    "name": "Status Change Notification",
    "trigger": {"type": "PROJECT_STATUS_CHANGED"},
    "actions": [
        {
            "type": "SEND_NOTIFICATION",
            "config": {
                "type": "PROJECT_STATUS_CHANGED",
                "userId": "{{project.leadStrategist.id}}",
                "message": "{{projectName}} moved to {{newStatus}}",
            },
        }
    ],
}


@pytest.fixture
def stored_workflow() -> WorkflowDefinition:
    return WorkflowDefinition.model_validate(STATUS_WORKFLOW)


@pytest.fixture
def engine(dispatcher, stored_workflow) -> WorkflowEngine:
    return WorkflowEngine(dispatcher, StaticWorkflowSource([stored_workflow]))


@pytest.fixture
def wired_app(test_app: FastAPI, engine: WorkflowEngine, http_client) -> FastAPI:
    test_app.dependency_overrides[get_workflow_engine] = lambda: engine
    test_app.dependency_overrides[get_http_client] = lambda: http_client
    return test_app


async def test_list_templates(client: AsyncClient) -> None:
    response = await client.get("/api/v1/workflows/templates")
    assert response.status_code == 200
    keys = [t["key"] for t in response.json()]
    assert "weekly_project_digest" in keys
    digest = next(t for t in response.json() if t["key"] == "weekly_project_digest")
    assert digest["trigger"]["schedule"]["dayOfWeek"] == 1


async def test_execute_inline_workflow(wired_app, client: AsyncClient, collaborators) -> None:
    response = await client.post(
        "/api/v1/workflows/execute",
        json={
            "workflow": STATUS_WORKFLOW,
            "triggerData": {
                "projectId": "p1",
                "projectName": "Glow",
                "newStatus": "LAUNCHED",
                "project": {"leadStrategist": {"id": "u9"}},
            },
            "userId": "user_1",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "SUCCESS"
    assert body["triggeredBy"] == "user_1"
    assert body["executedActions"][0]["action"] == "SEND_NOTIFICATION"
    assert body["executedActions"][0]["status"] == "SUCCESS"
    assert body["completedAt"] is not None
    args = collaborators.notification_creator.create_notification.await_args.args
    assert args[:3] == ("u9", "PROJECT_STATUS_CHANGED", "Glow moved to LAUNCHED")


async def test_execute_reports_unmet_conditions(wired_app, client: AsyncClient) -> None:
    workflow = {
        **STATUS_WORKFLOW,
        "trigger": {
            "type": "PROJECT_STATUS_CHANGED",
            "conditions": [{"field": "newStatus", "operator": "EQUALS", "value": "LAUNCHED"}],
        },
    }
    response = await client.post(
        "/api/v1/workflows/execute",
        json={"workflow": workflow, "triggerData": {"newStatus": "REVIEW"}, "userId": "u"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "FAILED"
    assert response.json()["error"] == "Workflow conditions not met"
    assert response.json()["executedActions"] == []


async def test_trigger_runs_matching_workflows(
    wired_app, client: AsyncClient, stored_workflow
) -> None:
    response = await client.post(
        "/api/v1/workflows/trigger",
        json={"eventType": "PROJECT_STATUS_CHANGED", "eventData": {}, "userId": "u"},
    )
    assert response.status_code == 200
    (log,) = response.json()
    assert log["workflowId"] == stored_workflow.id


async def test_trigger_with_no_match_returns_empty_list(wired_app, client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/workflows/trigger",
        json={"eventType": "FILE_UPLOADED", "userId": "u"},
    )
    assert response.status_code == 200
    assert response.json() == []


async def test_trigger_rejects_unknown_event_type(wired_app, client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/workflows/trigger", json={"eventType": "NOPE", "userId": "u"}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_publish_event_is_accepted(wired_app, client: AsyncClient) -> None:
    """The request succeeds even though background dispatch has no database."""
    response = await client.post(
        "/api/v1/workflows/events",
        json={"eventType": "PROJECT_CREATED", "eventData": {"projectId": "p1"}, "userId": "u"},
    )
    assert response.status_code == 202
    assert response.json() == {"status": "accepted", "eventType": "PROJECT_CREATED"}


async def test_list_workflows_uses_repository(
    test_app: FastAPI, client: AsyncClient, stored_workflow
) -> None:
    repo = AsyncMock()
    repo.list_workflows.return_value = [stored_workflow]
    test_app.dependency_overrides[get_workflow_repo] = lambda: repo

    response = await client.get("/api/v1/workflows", params={"limit": 10})

    assert response.status_code == 200
    assert response.json()[0]["id"] == stored_workflow.id
    repo.list_workflows.assert_awaited_once_with(skip=0, limit=10, include_disabled=True)


async def test_create_workflow(test_app: FastAPI, client: AsyncClient) -> None:
    repo = AsyncMock()
    repo.create_workflow.side_effect = lambda definition: definition
    test_app.dependency_overrides[get_workflow_repo_for_write] = lambda: repo

    response = await client.post(
        "/api/v1/workflows", json={**STATUS_WORKFLOW, "createdBy": "user_1"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Status Change Notification"
    assert body["createdBy"] == "user_1"
    assert body["enabled"] is True
    assert body["id"]


async def test_create_workflow_requires_actions(test_app: FastAPI, client: AsyncClient) -> None:
    test_app.dependency_overrides[get_workflow_repo_for_write] = lambda: AsyncMock()
    response = await client.post("/api/v1/workflows", json={**STATUS_WORKFLOW, "actions": []})
    assert response.status_code == 422


async def test_create_without_database_is_service_unavailable(client: AsyncClient) -> None:
    response = await client.post("/api/v1/workflows", json=STATUS_WORKFLOW)
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


async def test_http_client_dependency_reads_app_state(test_app: FastAPI) -> None:
    async with httpx.AsyncClient() as shared:
        test_app.state.http_client = shared
        transport = httpx.ASGITransport(app=test_app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.post(
                "/api/v1/workflows/events",
                json={"eventType": "PROJECT_CREATED", "userId": "u"},
            )
    assert response.status_code == 202
