"""Trigger condition evaluation.

A condition compares the value at a dotted path in event data with a
configured value. A trigger's conditions are AND-ed; an empty list always
holds. Unknown operators evaluate to False (fail closed).
"""

import math
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from app.application.dtos.workflow import WorkflowCondition
from app.application.services.template_substitution import (
    get_nested_value,
    stringify_value,
)
from app.shared.enums import ConditionOperator
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without cross-type coercion: True != 1 and "1" != 1."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def to_number(value: Any) -> float:
    """Numeric coercion for ordered comparisons; NaN when not numeric.

    Blank strings coerce to 0. Missing values (None) are NaN, so every
    comparison against them is False.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _as_text(value: Any) -> str:
    """Text form for substring checks. Lists join their items with commas."""
    if isinstance(value, (list, tuple)):
        return ",".join(_as_text(item) for item in value)
    return stringify_value(value)


def _contains(field_value: Any, value: Any) -> bool:
    return _as_text(value) in _as_text(field_value)


def _is_member(field_value: Any, value: Any) -> bool:
    return any(strict_equals(field_value, item) for item in value)


_OPERATORS: dict[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS: strict_equals,
    ConditionOperator.NOT_EQUALS: lambda a, b: not strict_equals(a, b),
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.NOT_CONTAINS: lambda a, b: not _contains(a, b),
    ConditionOperator.GREATER_THAN: lambda a, b: to_number(a) > to_number(b),
    ConditionOperator.LESS_THAN: lambda a, b: to_number(a) < to_number(b),
    # IN / NOT_IN require a list value; anything else is False for both.
    ConditionOperator.IN: lambda a, b: isinstance(b, list) and _is_member(a, b),
    ConditionOperator.NOT_IN: lambda a, b: isinstance(b, list) and not _is_member(a, b),
}


def evaluate_condition(condition: WorkflowCondition, data: Mapping[str, Any]) -> bool:
    """Return True if the value at condition.field satisfies operator/value."""
    try:
        operator = ConditionOperator(condition.operator)
    except ValueError:
        logger.warning(
            "Unknown condition operator %r on field %r; failing closed",
            condition.operator,
            condition.field,
        )
        return False
    field_value = get_nested_value(data, condition.field)
    return _OPERATORS[operator](field_value, condition.value)


def conditions_met(
    conditions: Iterable[WorkflowCondition] | None, data: Mapping[str, Any]
) -> bool:
    """True iff every condition holds (vacuously True for None or empty)."""
    return all(evaluate_condition(c, data) for c in conditions or ())
