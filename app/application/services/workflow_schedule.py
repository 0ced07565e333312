"""Schedule evaluation for SCHEDULE-triggered workflows.

The engine has no scheduler. An external cron (scripts/run_scheduled_workflows.py)
runs once a minute and asks is_schedule_due for each SCHEDULE workflow.
Schedules are interpreted in UTC.
"""

import calendar
from collections.abc import Iterable
from datetime import datetime

from app.application.dtos.workflow import WorkflowDefinition, WorkflowSchedule
from app.shared.enums import ScheduleType, WorkflowTriggerType
from app.shared.utils.datetime import ensure_utc, to_iso_utc

DEFAULT_SCHEDULE_TIME = "09:00"
DEFAULT_DAY_OF_WEEK = 1  # Monday (0 = Sunday)
DEFAULT_DAY_OF_MONTH = 1


def _sunday_based_weekday(moment: datetime) -> int:
    return (moment.weekday() + 1) % 7


def is_schedule_due(schedule: WorkflowSchedule, now: datetime) -> bool:
    """Return True if schedule fires in the minute containing now.

    WEEKLY without day_of_week fires on Monday; MONTHLY without day_of_month
    fires on the 1st. A day_of_month past the end of the month (e.g. 31 in
    April) fires on the month's last day.
    """
    moment = ensure_utc(now)
    hour, minute = (int(part) for part in (schedule.time or DEFAULT_SCHEDULE_TIME).split(":"))
    if (moment.hour, moment.minute) != (hour, minute):
        return False
    if schedule.type == ScheduleType.DAILY:
        return True
    if schedule.type == ScheduleType.WEEKLY:
        day = DEFAULT_DAY_OF_WEEK if schedule.day_of_week is None else schedule.day_of_week
        return _sunday_based_weekday(moment) == day
    day = schedule.day_of_month or DEFAULT_DAY_OF_MONTH
    last_day = calendar.monthrange(moment.year, moment.month)[1]
    return moment.day == min(day, last_day)


def select_due_workflows(
    workflows: Iterable[WorkflowDefinition], now: datetime
) -> list[WorkflowDefinition]:
    """Enabled SCHEDULE workflows whose schedule fires at now. Missing schedules never fire."""
    return [
        w
        for w in workflows
        if w.enabled
        and w.trigger.type == WorkflowTriggerType.SCHEDULE
        and w.trigger.schedule is not None
        and is_schedule_due(w.trigger.schedule, now)
    ]


def scheduled_event_data(now: datetime) -> dict[str, str]:
    """Synthetic trigger data for a scheduled run."""
    return {
        "eventType": WorkflowTriggerType.SCHEDULE.value,
        "scheduledAt": to_iso_utc(now),
    }
