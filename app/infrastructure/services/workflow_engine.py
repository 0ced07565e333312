"""Workflow engine: execute workflows triggered by events (implements IWorkflowEngine)."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from app.application.dtos.workflow import (
    ExecutedAction,
    WorkflowDefinition,
    WorkflowExecutionLog,
)
from app.application.interfaces.services import (
    IWorkflowDefinitionSource,
    IWorkflowEngine,
)
from app.application.services.workflow_conditions import conditions_met
from app.infrastructure.services.workflow_actions import (
    ActionDispatcher,
    action_type_name,
)
from app.shared.enums import (
    ActionExecutionStatus,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

CONDITIONS_NOT_MET = "Workflow conditions not met"

Sleep = Callable[[float], Awaitable[Any]]


class StaticWorkflowSource:
    """In-memory IWorkflowDefinitionSource over a fixed list of definitions."""

    def __init__(self, workflows: Iterable[WorkflowDefinition] = ()) -> None:
        self._workflows = list(workflows)

    async def get_enabled_workflows(self) -> list[WorkflowDefinition]:
        return [w for w in self._workflows if w.enabled]


class WorkflowEngine:
    """Runs workflow definitions: conditions, then actions in order, into an execution log.

    Action delays are awaited with ``sleep`` (non-blocking), scaled by
    ``delay_unit_seconds`` (60 by default: delays are declared in minutes).
    ``max_concurrency`` bounds how many matching workflows trigger_workflows
    runs at once; use 1 when collaborators share one database session.
    """

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        definition_source: IWorkflowDefinitionSource,
        *,
        delay_unit_seconds: float = 60.0,
        max_concurrency: int | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._dispatcher = dispatcher
        self._definition_source = definition_source
        self._delay_unit_seconds = delay_unit_seconds
        self._max_concurrency = max_concurrency
        self._sleep = sleep

    @traced("workflow.execute")
    async def execute_workflow(
        self,
        workflow: WorkflowDefinition,
        trigger_data: Mapping[str, Any],
        user_id: str,
    ) -> WorkflowExecutionLog:
        """Run one workflow and return its log, always in a terminal status."""
        log = WorkflowExecutionLog(
            workflow_id=workflow.id,
            triggered_by=user_id,
            trigger_data=dict(trigger_data),
        )
        try:
            add_span_attributes(
                workflow_id=workflow.id,
                trigger_type=_event_name(workflow.trigger.type),
            )
            if workflow.trigger.conditions and not conditions_met(
                workflow.trigger.conditions, trigger_data
            ):
                logger.info("Workflow %s skipped: conditions not met", workflow.id)
                log.finish(WorkflowExecutionStatus.FAILED, CONDITIONS_NOT_MET)
                add_span_attributes(status=log.status.value)
                return log

            for action in workflow.actions:
                if action.delay and action.delay > 0:
                    add_span_event("workflow.delay", {"minutes": action.delay})
                    await self._sleep(action.delay * self._delay_unit_seconds)

                result = await self._dispatcher.execute_action(
                    action, trigger_data, user_id
                )
                name = action_type_name(action)
                log.executed_actions.append(
                    ExecutedAction(
                        action=name,
                        status=(
                            ActionExecutionStatus.SUCCESS
                            if result.success
                            else ActionExecutionStatus.FAILED
                        ),
                        executed_at=utc_now(),
                        error=result.error,
                    )
                )
                if not result.success:
                    # Failed actions never stop the remaining ones.
                    logger.warning(
                        "Action %s failed in workflow %s: %s",
                        name,
                        workflow.id,
                        result.error,
                    )

            all_success = all(
                a.status == ActionExecutionStatus.SUCCESS for a in log.executed_actions
            )
            log.finish(
                WorkflowExecutionStatus.SUCCESS
                if all_success
                else WorkflowExecutionStatus.FAILED
            )
        except Exception as e:
            logger.exception(
                "Workflow %s execution failed (triggered_by=%s)", workflow.id, user_id
            )
            log.finish(WorkflowExecutionStatus.FAILED, str(e) or e.__class__.__name__)
        add_span_attributes(status=log.status.value)
        return log

    async def trigger_workflows(
        self,
        event_type: WorkflowTriggerType | str,
        event_data: Mapping[str, Any],
        user_id: str,
    ) -> list[WorkflowExecutionLog]:
        """Run every enabled workflow whose trigger type is event_type.

        Returns [] instead of raising if the definitions cannot be loaded.
        """
        try:
            workflows = await self._definition_source.get_enabled_workflows()
            matching = [
                w for w in workflows if w.enabled and w.trigger.type == event_type
            ]
            if not matching:
                return []
            logger.info(
                "Event %s matched %d workflows", _event_name(event_type), len(matching)
            )
            if self._max_concurrency is None:
                runs = [self.execute_workflow(w, event_data, user_id) for w in matching]
                return list(await asyncio.gather(*runs))

            semaphore = asyncio.Semaphore(self._max_concurrency)

            async def _bounded(workflow: WorkflowDefinition) -> WorkflowExecutionLog:
                async with semaphore:
                    return await self.execute_workflow(workflow, event_data, user_id)

            return list(await asyncio.gather(*(_bounded(w) for w in matching)))
        except Exception:
            logger.exception(
                "Error triggering workflows for %s", _event_name(event_type)
            )
            return []


def _event_name(event_type: WorkflowTriggerType | str) -> str:
    return event_type.value if isinstance(event_type, WorkflowTriggerType) else event_type


async def trigger_workflow(
    engine: IWorkflowEngine,
    event_type: WorkflowTriggerType | str,
    event_data: Mapping[str, Any],
    user_id: str,
) -> None:
    """Fire-and-forget dispatch for request handlers. Never raises.

    Workflow failures must not fail the operation that emitted the event.
    """
    try:
        await engine.trigger_workflows(event_type, event_data, user_id)
    except Exception:
        logger.exception("Failed to trigger workflows for %s", _event_name(event_type))
