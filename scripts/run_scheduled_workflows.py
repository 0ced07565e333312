"""Run SCHEDULE workflows that are due this minute.

Usage:
    python -m scripts.run_scheduled_workflows [user_id]
Run from cron once a minute. user_id is recorded as the acting user
(default: "system"). Requires DATABASE_URL.
"""

import asyncio
import sys

import httpx

import app.infrastructure.persistence.database as database
from app.api.v1.dependencies import build_workflow_engine
from app.application.services.workflow_schedule import (
    scheduled_event_data,
    select_due_workflows,
)
from app.core.config import get_settings
from app.infrastructure.persistence.repositories import WorkflowRepository
from app.shared.enums import WorkflowExecutionStatus, WorkflowTriggerType
from app.shared.telemetry.logging import setup_logging
from app.shared.utils.datetime import utc_now


async def main() -> None:
    """Load enabled SCHEDULE workflows, keep the due ones, and execute each."""
    settings = get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    user_id = sys.argv[1] if len(sys.argv) > 1 else "system"
    now = utc_now()

    async with database.session_scope() as session:
        workflows = await WorkflowRepository(session).get_enabled_workflows(
            trigger_type=WorkflowTriggerType.SCHEDULE.value
        )
    due = select_due_workflows(workflows, now)
    if not due:
        print("No scheduled workflows due")
        await database.dispose_engine()
        return

    event_data = scheduled_event_data(now)
    failed = 0
    async with httpx.AsyncClient(timeout=settings.webhook_timeout_seconds) as client:
        for workflow in due:
            # One transaction per workflow: a failing run does not roll back the others.
            async with database.session_scope() as session:
                engine = build_workflow_engine(session, client, settings)
                log = await engine.execute_workflow(workflow, event_data, user_id)
            if log.status != WorkflowExecutionStatus.SUCCESS:
                failed += 1
            print(f"Workflow {workflow.name} ({workflow.id}): {log.status.value}")

    print(f"Done. Ran {len(due)} workflow(s), {failed} failed")
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
