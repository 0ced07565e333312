"""Application services: pure workflow logic (substitution, conditions, schedules, signing)."""

from app.application.services.template_substitution import (
    get_nested_value,
    stringify_value,
    substitute_in_object,
    substitute_template,
)
from app.application.services.webhook_signing import (
    build_webhook_body,
    generate_webhook_signature,
    serialize_payload,
    verify_webhook_signature,
)
from app.application.services.workflow_conditions import (
    conditions_met,
    evaluate_condition,
)
from app.application.services.workflow_schedule import (
    is_schedule_due,
    scheduled_event_data,
    select_due_workflows,
)
from app.application.services.workflow_templates import (
    get_workflow_template,
    list_workflow_templates,
)

__all__ = [
    "build_webhook_body",
    "conditions_met",
    "evaluate_condition",
    "generate_webhook_signature",
    "get_nested_value",
    "get_workflow_template",
    "is_schedule_due",
    "list_workflow_templates",
    "scheduled_event_data",
    "select_due_workflows",
    "serialize_payload",
    "stringify_value",
    "substitute_in_object",
    "substitute_template",
    "verify_webhook_signature",
]
