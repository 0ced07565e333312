"""Workflow ORM model. Stored definition: trigger and actions as JSON."""

from typing import Any

import sqlalchemy as sa
from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedByMixin, EntityModel


class Workflow(EntityModel, CreatedByMixin, Base):
    """Workflow definition. Table: workflow.

    trigger_type duplicates trigger["type"] so enabled workflows can be
    filtered by event type in SQL.
    """

    __tablename__ = "workflow"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.true()
    )
    trigger_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    trigger: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    actions: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
