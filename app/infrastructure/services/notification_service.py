"""In-app notification service: persists one notification per recipient."""

from __future__ import annotations

import logging

from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from app.shared.enums import NotificationType
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def split_user_ids(user_id: str | None) -> list[str]:
    """'a, b,,c' -> ['a', 'b', 'c'] (array-flatten tokens resolve to comma lists)."""
    if not user_id:
        return []
    ids: list[str] = []
    for part in user_id.split(","):
        uid = part.strip()
        if uid and uid not in ids:
            ids.append(uid)
    return ids


def default_title(notification_type: NotificationType) -> str:
    """PROJECT_STATUS_CHANGED -> 'Project status changed'."""
    return notification_type.value.replace("_", " ").capitalize()


class NotificationService:
    """INotificationCreator implementation backed by NotificationRepository.

    Raises ValidationException when user_id or type is missing or type is unknown;
    the action dispatcher turns that into a failed action.
    """

    def __init__(self, repo: NotificationRepository) -> None:
        self._repo = repo

    async def create_notification(
        self,
        user_id: str | None,
        type: str | None,
        message: str | None,
        project_id: str | None,
        triggered_by_id: str | None,
        *,
        title: str | None = None,
        action_url: str | None = None,
    ) -> None:
        user_ids = split_user_ids(user_id)
        if not user_ids:
            raise ValidationException("Notification userId is required", field="userId")
        if not type:
            raise ValidationException("Notification type is required", field="type")
        try:
            notification_type = NotificationType(type)
        except ValueError as e:
            raise ValidationException(
                f"Unknown notification type: {type}", field="type"
            ) from e

        resolved_title = title or default_title(notification_type)
        await self._repo.create_many(
            [
                Notification(
                    user_id=uid,
                    type=notification_type.value,
                    title=resolved_title,
                    message=message,
                    action_url=action_url,
                    triggered_by_id=triggered_by_id,
                    related_project_id=project_id,
                )
                for uid in user_ids
            ]
        )
        logger.info(
            "Notification %s created for %d users (project_id=%s)",
            notification_type.value,
            len(user_ids),
            project_id,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Notification recipients: %s", user_ids)
