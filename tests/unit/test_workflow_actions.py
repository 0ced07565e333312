"""Tests for ActionDispatcher: every action type, webhooks and failure capture."""

import json

import pytest

from app.application.dtos.workflow import WorkflowAction
from app.application.services.webhook_signing import (
    generate_webhook_signature,
    verify_webhook_signature,
)
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.services.workflow_actions import (
    DEFAULT_EMAIL_SUBJECT,
    UNKNOWN_ACTION_TYPE,
    WEBHOOK_URL_MISSING,
    action_type_name,
)


def _action(type_: str, **config) -> WorkflowAction:
    return WorkflowAction(type=type_, config=config)


async def test_send_email_substitutes_and_merges_config_into_data(
    dispatcher, collaborators
) -> None:
    """Config tokens resolve against event data; the template sees data plus config."""
    data = {"projectName": "Glow", "reviewer": {"email": "u1@test.com"}}
    action = _action("SEND_EMAIL", to="{{reviewer.email}}", template="approvalRequested")

    result = await dispatcher.execute_action(action, data, "user_1")

    assert result.success is True
    collaborators.email_sender.send_template_email.assert_awaited_once()
    kwargs = collaborators.email_sender.send_template_email.await_args.kwargs
    assert kwargs["to"] == "u1@test.com"
    assert kwargs["template"] == "approvalRequested"
    assert kwargs["subject"] == DEFAULT_EMAIL_SUBJECT
    assert kwargs["data"]["projectName"] == "Glow"
    assert kwargs["data"]["to"] == "u1@test.com"


async def test_send_email_uses_configured_subject(dispatcher, collaborators) -> None:
    action = _action("SEND_EMAIL", to="a@x.com", template="weeklyDigest", subject="Digest")
    await dispatcher.execute_action(action, {}, "user_1")
    kwargs = collaborators.email_sender.send_template_email.await_args.kwargs
    assert kwargs["subject"] == "Digest"


async def test_send_email_reports_sender_failure(dispatcher, collaborators) -> None:
    collaborators.email_sender.send_template_email.return_value = False
    result = await dispatcher.execute_action(
        _action("SEND_EMAIL", to="a@x.com", template="x"), {}, "user_1"
    )
    assert result.success is False
    assert result.error == "Email not sent"


async def test_send_notification_passes_project_and_actor(
    dispatcher, collaborators
) -> None:
    action = _action(
        "SEND_NOTIFICATION",
        userId="{{leadStrategist.id}}",
        type="PROJECT_ASSIGNED",
        message="You have been assigned to {{projectName}}",
    )
    data = {"projectId": "p1", "projectName": "Glow", "leadStrategist": {"id": "u9"}}

    result = await dispatcher.execute_action(action, data, "user_1")

    assert result.success is True
    collaborators.notification_creator.create_notification.assert_awaited_once_with(
        "u9",
        "PROJECT_ASSIGNED",
        "You have been assigned to Glow",
        "p1",
        "user_1",
        title=None,
        action_url=None,
    )


async def test_update_status_requires_project_id(dispatcher, collaborators) -> None:
    action = _action("UPDATE_STATUS", status="REVIEW")

    assert (await dispatcher.execute_action(action, {}, "u")).success is True
    collaborators.project_store.update_project.assert_not_awaited()

    await dispatcher.execute_action(action, {"projectId": "p1"}, "u")
    collaborators.project_store.update_project.assert_awaited_once_with(
        "p1", {"status": "REVIEW"}
    )


async def test_update_status_without_status_is_a_no_op(dispatcher, collaborators) -> None:
    result = await dispatcher.execute_action(_action("UPDATE_STATUS"), {"projectId": "p1"}, "u")

    assert result.success is True
    collaborators.project_store.update_project.assert_not_awaited()



async def test_assign_user_sets_lead_strategist(dispatcher, collaborators) -> None:
    await dispatcher.execute_action(_action("ASSIGN_USER", userId="u5"), {"projectId": "p1"}, "u")
    collaborators.project_store.update_project.assert_awaited_once_with(
        "p1", {"lead_strategist_id": "u5"}
    )


async def test_assign_user_without_user_id_is_a_successful_no_op(
    dispatcher, collaborators
) -> None:
    """The auto-assign template has no userId; nothing is written."""
    action = _action("ASSIGN_USER", role="ADMIN", field="leadStrategist")
    result = await dispatcher.execute_action(action, {"projectId": "p1"}, "u")
    assert result.success is True
    collaborators.project_store.update_project.assert_not_awaited()


async def test_add_comment_is_system_generated_by_actor(dispatcher, collaborators) -> None:
    action = _action("ADD_COMMENT", text="Completed the {{phaseName}} phase")
    await dispatcher.execute_action(action, {"projectId": "p1", "phaseName": "LAUNCH"}, "user_1")
    collaborators.comment_store.create_system_comment.assert_awaited_once_with(
        "p1", "Completed the LAUNCH phase", "user_1"
    )


@pytest.mark.parametrize(
    ("config", "awaited"),
    [
        ({"field": "budget", "value": 0}, True),
        ({"field": "budget", "value": None}, False),
        ({"value": "x"}, False),
    ],
)
async def test_update_field_requires_field_and_value(
    dispatcher, collaborators, config, awaited
) -> None:
    result = await dispatcher.execute_action(
        _action("UPDATE_FIELD", **config), {"projectId": "p1"}, "u"
    )
    assert result.success is True
    assert collaborators.project_store.update_project.await_count == int(awaited)


async def test_create_task_succeeds_without_side_effects(dispatcher, collaborators) -> None:
    result = await dispatcher.execute_action(_action("CREATE_TASK", title="Follow up"), {}, "u")
    assert result.success is True
    collaborators.project_store.update_project.assert_not_awaited()


async def test_webhook_posts_event_body(dispatcher, webhook_recorder) -> None:
    data = {"eventType": "PROJECT_CREATED", "projectId": "p1"}
    action = _action(
        "SEND_WEBHOOK", url="https://hooks.test/{{projectId}}", headers={"X-Env": "test"}
    )

    result = await dispatcher.execute_action(action, data, "u")

    assert result.success is True
    (request,) = webhook_recorder.requests
    assert request.method == "POST"
    assert str(request.url) == "https://hooks.test/p1"
    assert request.headers["content-type"] == "application/json"
    assert request.headers["x-env"] == "test"
    assert "x-webhook-signature" not in request.headers
    assert json.loads(request.content) == {
        "event": "PROJECT_CREATED",
        "data": data,
        "timestamp": "2025-01-15T12:00:00.000Z",
    }


async def test_webhook_with_secret_is_signed(dispatcher, webhook_recorder) -> None:
    action = _action("SEND_WEBHOOK", url="https://hooks.test", method="put", secret="s3cret")

    await dispatcher.execute_action(action, {"eventType": "SCHEDULE"}, "u")

    (request,) = webhook_recorder.requests
    payload = request.content.decode()
    assert request.method == "PUT"
    assert request.headers["x-webhook-signature"] == generate_webhook_signature(
        payload, "s3cret"
    )
    assert verify_webhook_signature(payload, request.headers["x-webhook-signature"], "s3cret")
    assert request.headers["x-webhook-event"] == "SCHEDULE"
    assert request.headers["x-webhook-timestamp"] == "2025-01-15T12:00:00.000Z"


async def test_webhook_without_url_fails(dispatcher, webhook_recorder) -> None:
    result = await dispatcher.execute_action(_action("SEND_WEBHOOK"), {}, "u")
    assert result.success is False
    assert result.error == WEBHOOK_URL_MISSING
    assert webhook_recorder.requests == []


async def test_webhook_non_2xx_fails_with_status(dispatcher, webhook_recorder) -> None:
    webhook_recorder.status_code = 500
    result = await dispatcher.execute_action(
        _action("SEND_WEBHOOK", url="https://hooks.test"), {}, "u"
    )
    assert result.success is False
    assert result.error == "HTTP 500"


async def test_unknown_action_type_fails(dispatcher) -> None:
    action = _action("SEND_FAX", to="123")
    result = await dispatcher.execute_action(action, {}, "u")
    assert result.success is False
    assert result.error == UNKNOWN_ACTION_TYPE
    assert action_type_name(action) == "SEND_FAX"


async def test_collaborator_exception_becomes_failed_result(
    dispatcher, collaborators
) -> None:
    """execute_action never raises; the exception message is the error."""
    collaborators.project_store.update_project.side_effect = ResourceNotFoundException(
        "project", "p404"
    )
    result = await dispatcher.execute_action(
        _action("UPDATE_STATUS", status="REVIEW"), {"projectId": "p404"}, "u"
    )
    assert result.success is False
    assert "p404" in result.error


async def test_invalid_config_shape_becomes_failed_result(dispatcher, webhook_recorder) -> None:
    action = _action("SEND_WEBHOOK", url="https://hooks.test", headers="not-a-mapping")
    result = await dispatcher.execute_action(action, {}, "u")
    assert result.success is False
    assert result.error
    assert webhook_recorder.requests == []
