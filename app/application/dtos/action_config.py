"""Typed action configs: one model per action type.

Action configs are stored as free-form dicts whose string values may hold
template tokens. After substitution, the resolved dict is parsed into the
model for its action type so handlers read typed attributes instead of
string keys. Unknown keys are kept (SEND_EMAIL passes the whole config to
the email template).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.shared.enums import WorkflowActionType


class ActionConfig(BaseModel):
    """Base for typed action configs (camelCase keys accepted)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


class SendEmailConfig(ActionConfig):
    to: str | list[str] | None = None
    template: str | None = None
    subject: str | None = None


class SendNotificationConfig(ActionConfig):
    user_id: str | None = None
    type: str | None = None
    message: str | None = None
    title: str | None = None
    action_url: str | None = None


class UpdateStatusConfig(ActionConfig):
    status: str | None = None


class AssignUserConfig(ActionConfig):
    user_id: str | None = None


class AddCommentConfig(ActionConfig):
    text: str | None = None


class SendWebhookConfig(ActionConfig):
    url: str | None = None
    method: str | None = None
    headers: dict[str, str] | None = None
    secret: str | None = None


class UpdateFieldConfig(ActionConfig):
    field: str | None = None
    value: Any = None


class CreateTaskConfig(ActionConfig):
    title: str | None = None


ACTION_CONFIG_MODELS: dict[WorkflowActionType, type[ActionConfig]] = {
    WorkflowActionType.SEND_EMAIL: SendEmailConfig,
    WorkflowActionType.SEND_NOTIFICATION: SendNotificationConfig,
    WorkflowActionType.UPDATE_STATUS: UpdateStatusConfig,
    WorkflowActionType.ASSIGN_USER: AssignUserConfig,
    WorkflowActionType.ADD_COMMENT: AddCommentConfig,
    WorkflowActionType.SEND_WEBHOOK: SendWebhookConfig,
    WorkflowActionType.UPDATE_FIELD: UpdateFieldConfig,
    WorkflowActionType.CREATE_TASK: CreateTaskConfig,
}


def parse_action_config(
    action_type: WorkflowActionType, config: dict[str, Any]
) -> ActionConfig:
    """Validate a resolved config dict into the typed model for action_type.

    Raises:
        pydantic.ValidationError: If a known field has the wrong shape
            (e.g. webhook headers that are not a mapping).
    """
    return ACTION_CONFIG_MODELS[action_type].model_validate(config)
