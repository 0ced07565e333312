"""Tests for the built-in workflow templates."""

from app.application.services.workflow_templates import (
    get_workflow_template,
    list_workflow_templates,
)
from app.shared.enums import WorkflowActionType, WorkflowTriggerType


def test_all_templates_validate_with_unique_keys() -> None:
    templates = list_workflow_templates()
    keys = [t.key for t in templates]
    assert len(templates) == 6
    assert len(set(keys)) == len(keys)
    assert all(t.actions for t in templates)


def test_weekly_digest_is_monday_nine() -> None:
    template = get_workflow_template("weekly_project_digest")
    assert template is not None
    assert template.trigger.type == WorkflowTriggerType.SCHEDULE
    assert template.trigger.schedule.day_of_week == 1
    assert template.trigger.schedule.time == "09:00"


def test_get_unknown_template_returns_none() -> None:
    assert get_workflow_template("nope") is None


def test_templates_are_copied_per_call() -> None:
    first = list_workflow_templates()[0]
    first.actions.clear()
    assert list_workflow_templates()[0].actions


def test_to_definition_creates_enabled_definition_with_new_id() -> None:
    template = get_workflow_template("approval_due_date_reminder")
    definition = template.to_definition(created_by="user_1")
    again = template.to_definition()

    assert definition.name == "Approval Due Date Reminder"
    assert definition.enabled is True
    assert definition.created_by == "user_1"
    assert definition.id != again.id
    assert definition.created_at is not None
    assert [a.type for a in definition.actions] == [
        WorkflowActionType.SEND_EMAIL,
        WorkflowActionType.SEND_NOTIFICATION,
    ]
