"""Project repository (IProjectStore)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic.alias_generators import to_snake
from sqlalchemy import DateTime, inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.persistence.models.project import Project
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Columns workflows must not overwrite.
_PROTECTED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


class ProjectRepository(BaseRepository[Project]):
    """Project repository. Field-level updates by column name (snake_case or camelCase)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Project)

    @staticmethod
    def _updatable_columns() -> dict[str, Any]:
        mapper = sa_inspect(Project)
        return {
            col.key: col
            for col in mapper.columns
            if col.key not in _PROTECTED_COLUMNS
        }

    def _coerce(self, column: Any, field: str, value: Any) -> Any:
        if isinstance(column.type, DateTime) and isinstance(value, str):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError as e:
                raise ValidationException(
                    f"Invalid datetime for {field}: {value!r}", field=field
                ) from e
        return value

    async def update_project(self, project_id: str, values: dict[str, Any]) -> None:
        """Set each key of values on the project.

        Raises:
            ResourceNotFoundException: If the project does not exist.
            ValidationException: If a key is not an updatable project column.
        """
        columns = self._updatable_columns()
        resolved: dict[str, Any] = {}
        for key, value in values.items():
            column_name = key if key in columns else to_snake(key)
            if column_name not in columns:
                raise ValidationException(
                    f"Unknown project field: {key}", field=key
                )
            resolved[column_name] = self._coerce(columns[column_name], key, value)

        project = await self.get_by_id(project_id)
        if project is None:
            raise ResourceNotFoundException("project", project_id)
        async with self.db.begin_nested():
            for column_name, value in resolved.items():
                setattr(project, column_name, value)
            await self.db.flush()
        logger.debug(
            "Project %s updated: %s", project_id, ", ".join(sorted(resolved))
        )
