"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import (
    CreatedByMixin,
    CuidMixin,
    EntityModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.models.project import Comment, Project
from app.infrastructure.persistence.models.workflow import Workflow

__all__ = [
    "Comment",
    "CreatedByMixin",
    "CuidMixin",
    "EntityModel",
    "Notification",
    "Project",
    "TimestampMixin",
    "Workflow",
]
