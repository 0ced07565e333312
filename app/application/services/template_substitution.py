"""Template substitution for workflow action configs.

Resolves {{path.to.field}} tokens against event data. A token of the form
{{items[].prop}} maps prop over the list at items and joins with ", ".
Tokens whose value is missing or None are left as literal text. Single
pass: substituted values are never re-scanned for tokens.
"""

import json
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

_TOKEN_RE = re.compile(r"\{\{([\w.\[\]]+)\}\}")
_ARRAY_MARKER = "[]."
_LIST_SEPARATOR = ", "


def get_nested_value(obj: Any, path: str) -> Any:
    """Walk a dotted path through mappings (and list indexes); None if any step is missing.

    E.g. get_nested_value({"a": {"b": [10, 20]}}, "a.b.1") -> 20.
    """
    current = obj
    for key in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        elif (
            isinstance(current, Sequence)
            and not isinstance(current, (str, bytes))
            and key.isdigit()
        ):
            index = int(key)
            current = current[index] if index < len(current) else None
        else:
            return None
    return current


def stringify_value(value: Any) -> str:
    """String form of a data value as it appears in rendered text.

    None -> "", booleans -> "true"/"false", integral floats without ".0",
    mappings and lists as JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def _resolve_token(path: str, data: Mapping[str, Any]) -> str | None:
    if "[]" in path:
        array_path, _, prop = path.partition(_ARRAY_MARKER)
        items = get_nested_value(data, array_path)
        if isinstance(items, list):
            return _LIST_SEPARATOR.join(
                stringify_value(get_nested_value(item, prop)) for item in items
            )
    value = get_nested_value(data, path)
    if value is None:
        return None
    return stringify_value(value)


def substitute_template(template: str, data: Mapping[str, Any]) -> str:
    """Replace every {{path}} token in template; unresolved tokens stay verbatim."""

    def _replace(match: re.Match[str]) -> str:
        resolved = _resolve_token(match.group(1), data)
        return match.group(0) if resolved is None else resolved

    return _TOKEN_RE.sub(_replace, template)


def substitute_in_object(obj: Any, data: Mapping[str, Any]) -> Any:
    """Substitute every string leaf of a dict/list tree; other leaves pass through.

    Returns a new structure; obj is not modified.
    """
    if isinstance(obj, str):
        return substitute_template(obj, data)
    if isinstance(obj, Mapping):
        return {key: substitute_in_object(value, data) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [substitute_in_object(item, data) for item in obj]
    return obj
