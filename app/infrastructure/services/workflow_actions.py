"""Action dispatcher: runs one workflow action and reports the outcome.

execute_action never raises. Template tokens in the action config are
resolved against the event data, the result is parsed into the typed
config for the action type, and the matching handler performs the side
effect through an injected collaborator. Any exception becomes a failed
ActionResult carrying the exception message.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime
from typing import Any

import httpx

from app.application.dtos.action_config import (
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
from app.application.dtos.workflow import ActionResult, WorkflowAction
from app.application.interfaces.services import (
    ICommentStore,
    IEmailSender,
    INotificationCreator,
    IProjectStore,
)
from app.application.services.template_substitution import substitute_in_object
from app.application.services.webhook_signing import (
    build_webhook_body,
    generate_webhook_signature,
    serialize_payload,
)
from app.shared.enums import WorkflowActionType
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

UNKNOWN_ACTION_TYPE = "Unknown action type"
WEBHOOK_URL_MISSING = "Webhook URL not configured"
DEFAULT_EMAIL_SUBJECT = "Notification from WaveLaunch Studio"

_Handler = Callable[[Any, Mapping[str, Any], str], Awaitable[ActionResult]]


class ActionDispatcher:
    """Dispatches workflow actions to the email, notification, project, comment and HTTP collaborators."""

    def __init__(
        self,
        *,
        email_sender: IEmailSender,
        notification_creator: INotificationCreator,
        project_store: IProjectStore,
        comment_store: ICommentStore,
        http_client: httpx.AsyncClient,
        default_email_subject: str = DEFAULT_EMAIL_SUBJECT,
        webhook_timeout_seconds: float = 30.0,
        webhook_user_agent: str = "WaveLaunch-Webhooks/1.0",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._email_sender = email_sender
        self._notification_creator = notification_creator
        self._project_store = project_store
        self._comment_store = comment_store
        self._http_client = http_client
        self._default_email_subject = default_email_subject
        self._webhook_timeout = webhook_timeout_seconds
        self._webhook_user_agent = webhook_user_agent
        self._clock = clock
        self._handlers: dict[WorkflowActionType, _Handler] = {
            WorkflowActionType.SEND_EMAIL: self._send_email,
            WorkflowActionType.SEND_NOTIFICATION: self._send_notification,
            WorkflowActionType.UPDATE_STATUS: self._update_status,
            WorkflowActionType.ASSIGN_USER: self._assign_user,
            WorkflowActionType.ADD_COMMENT: self._add_comment,
            WorkflowActionType.SEND_WEBHOOK: self._send_webhook,
            WorkflowActionType.UPDATE_FIELD: self._update_field,
            WorkflowActionType.CREATE_TASK: self._create_task,
        }

    @traced("workflow.execute_action")
    async def execute_action(
        self, action: WorkflowAction, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        """Run one action against event data on behalf of user_id."""
        try:
            try:
                action_type = WorkflowActionType(action.type)
            except ValueError:
                logger.warning("Unknown workflow action type: %r", action.type)
                return ActionResult.failed(UNKNOWN_ACTION_TYPE)
            add_span_attributes(action_type=action_type.value)
            resolved = substitute_in_object(action.config, data)
            config = parse_action_config(action_type, resolved)
            return await self._handlers[action_type](config, data, user_id)
        except Exception as e:
            logger.warning(
                "Error executing workflow action %s: %s",
                action.type,
                e,
                exc_info=True,
            )
            return ActionResult.failed(str(e) or e.__class__.__name__)

    async def _send_email(
        self, config: SendEmailConfig, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        merged = {**data, **config.model_dump(by_alias=True, exclude_unset=True)}
        sent = await self._email_sender.send_template_email(
            to=config.to,
            template=config.template or "",
            data=merged,
            subject=config.subject or self._default_email_subject,
        )
        return ActionResult.ok() if sent else ActionResult.failed("Email not sent")

    async def _send_notification(
        self, config: SendNotificationConfig, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        await self._notification_creator.create_notification(
            config.user_id,
            config.type,
            config.message,
            data.get("projectId"),
            user_id,
            title=config.title,
            action_url=config.action_url,
        )
        return ActionResult.ok()

    async def _update_status(
        self, config: UpdateStatusConfig, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        project_id = data.get("projectId")
        if project_id and config.status is not None:
            await self._project_store.update_project(
                project_id, {"status": config.status}
            )
        return ActionResult.ok()

    async def _assign_user(
        self, config: AssignUserConfig, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        project_id = data.get("projectId")
        if project_id and config.user_id:
            await self._project_store.update_project(
                project_id, {"lead_strategist_id": config.user_id}
            )
        return ActionResult.ok()

    async def _add_comment(
        self, config: AddCommentConfig, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        project_id = data.get("projectId")
        if project_id:
            await self._comment_store.create_system_comment(
                project_id, config.text, user_id
            )
        return ActionResult.ok()

    async def _send_webhook(
        self, config: SendWebhookConfig, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        if not config.url:
            return ActionResult.failed(WEBHOOK_URL_MISSING)
        body = build_webhook_body(dict(data), now=self._clock())
        payload = serialize_payload(body)
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self._webhook_user_agent,
            **(config.headers or {}),
        }
        if config.secret:
            headers["X-Webhook-Signature"] = generate_webhook_signature(
                payload, config.secret
            )
            headers["X-Webhook-Timestamp"] = body["timestamp"]
            if body["event"] is not None:
                headers["X-Webhook-Event"] = str(body["event"])
        method = (config.method or "POST").upper()
        response = await self._http_client.request(
            method,
            config.url,
            content=payload.encode(),
            headers=headers,
            timeout=self._webhook_timeout,
        )
        if response.is_success:
            return ActionResult.ok()
        logger.warning(
            "Webhook %s %s answered HTTP %d", method, config.url, response.status_code
        )
        return ActionResult.failed(f"HTTP {response.status_code}")

    async def _update_field(
        self, config: UpdateFieldConfig, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        project_id = data.get("projectId")
        if project_id and config.field and config.value is not None:
            await self._project_store.update_project(
                project_id, {config.field: config.value}
            )
        return ActionResult.ok()

    async def _create_task(
        self, config: CreateTaskConfig, data: Mapping[str, Any], user_id: str
    ) -> ActionResult:
        # No task system yet; the action is accepted and logged.
        logger.info("CREATE_TASK action: %s", config.model_dump(exclude_none=True))
        return ActionResult.ok()


def action_type_name(action: WorkflowAction) -> str:
    """Plain string for logs: 'SEND_EMAIL' for enum or raw unknown types."""
    if isinstance(action.type, WorkflowActionType):
        return action.type.value
    return str(action.type)
