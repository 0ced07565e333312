"""Project and Comment ORM models: the records workflow actions mutate."""

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel


class Project(EntityModel, Base):
    """Creator brand-launch project. Table: project."""

    __tablename__ = "project"

    project_name: Mapped[str] = mapped_column(String, nullable=False)
    creator_name: Mapped[str | None] = mapped_column(String, nullable=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default="DISCOVERY", index=True
    )
    lead_strategist_id: Mapped[str | None] = mapped_column(
        String, nullable=True, index=True
    )
    start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    expected_launch_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class Comment(EntityModel, Base):
    """Project comment; workflow ADD_COMMENT creates system-generated ones. Table: comment."""

    __tablename__ = "comment"

    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[str | None] = mapped_column(String, nullable=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    is_system_generated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.false()
    )
