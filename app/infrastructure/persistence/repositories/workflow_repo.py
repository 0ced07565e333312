"""Workflow definition repository (IWorkflowDefinitionSource)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import WorkflowDefinition
from app.infrastructure.persistence.models.workflow import Workflow
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _to_definition(row: Workflow) -> WorkflowDefinition:
    return WorkflowDefinition.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "description": row.description,
            "enabled": row.enabled,
            "trigger": row.trigger,
            "actions": row.actions,
            "created_by": row.created_by,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


class WorkflowRepository(BaseRepository[Workflow]):
    """Workflow repository. Returns validated WorkflowDefinition objects."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    async def _on_after_create(self, obj: Workflow) -> None:
        logger.info(
            "Workflow created: id=%s name=%s trigger=%s",
            obj.id,
            obj.name,
            obj.trigger_type,
        )

    async def get_enabled_workflows(
        self, trigger_type: str | None = None
    ) -> list[WorkflowDefinition]:
        """Return enabled workflows, optionally only those for trigger_type.

        Rows whose stored JSON no longer validates are skipped with a warning
        so one bad definition does not block every other workflow.
        """
        q = select(Workflow).where(Workflow.enabled.is_(True))
        if trigger_type is not None:
            q = q.where(Workflow.trigger_type == trigger_type)
        result = await self.db.execute(q.order_by(Workflow.created_at.asc()))
        definitions: list[WorkflowDefinition] = []
        for row in result.scalars().all():
            try:
                definitions.append(_to_definition(row))
            except ValueError as e:
                logger.warning("Skipping invalid workflow %s: %s", row.id, e)
        return definitions

    async def list_workflows(
        self, skip: int = 0, limit: int = 100, include_disabled: bool = True
    ) -> list[WorkflowDefinition]:
        q = select(Workflow)
        if not include_disabled:
            q = q.where(Workflow.enabled.is_(True))
        q = q.order_by(Workflow.created_at.asc()).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_to_definition(row) for row in result.scalars().all()]

    async def get_definition(self, workflow_id: str) -> WorkflowDefinition | None:
        row = await self.get_by_id(workflow_id)
        return _to_definition(row) if row is not None else None

    async def create_workflow(self, definition: WorkflowDefinition) -> WorkflowDefinition:
        """Persist a definition. trigger/actions are stored in camelCase JSON."""
        trigger = definition.trigger.model_dump(
            mode="json", by_alias=True, exclude_none=True
        )
        row = Workflow(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            enabled=definition.enabled,
            trigger_type=trigger["type"],
            trigger=trigger,
            actions=[
                a.model_dump(mode="json", by_alias=True, exclude_none=True)
                for a in definition.actions
            ],
            created_by=definition.created_by,
        )
        row = await self.create(row)
        return _to_definition(row)
