"""Conversion between JSON-shaped filter trees and domain entities.

Rules are stored and exchanged as nested JSON objects:

    {"id": "root", "operator": "and",
     "filters": [{"id": "f1", "field": "description", "operator": "contains", "value": "coffee"}],
     "groups": [{"id": "g1", "operator": "or", "filters": [...]}]}

Only the tree structure is validated here. Unknown field names and
comparison operators are kept as-is; the matcher treats them as non-matching.
"""

from typing import Any

from txrules.domain.entities import Filter, GroupFilter, GroupOperator, RuleAction
from txrules.domain.errors import ValidationError, invalid_filter_node

_GROUP_OPERATORS = {op.value for op in GroupOperator}
_INTERNAL_FLAGS = {"yes", "no"}


def _require_str(node: dict[str, Any], key: str, path: str) -> str:
    value = node.get(key)
    if not isinstance(value, str):
        raise ValidationError(invalid_filter_node(path, f"'{key}' must be a string"))
    return value


def _require_list(node: dict[str, Any], key: str, path: str) -> list[Any]:
    value = node.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(invalid_filter_node(path, f"'{key}' must be a list"))
    return value


def filter_from_dict(data: Any, path: str = "filter") -> Filter:
    """Build a Filter from its JSON form.

    Raises:
        ValidationError: If the node is not an object or a key is missing
    """
    if not isinstance(data, dict):
        raise ValidationError(invalid_filter_node(path, "expected an object"))
    return Filter(
        id=_require_str(data, "id", path),
        field=_require_str(data, "field", path),
        operator=_require_str(data, "operator", path),
        value=_require_str(data, "value", path),
    )


def group_filter_from_dict(data: Any, path: str = "root") -> GroupFilter:
    """Build a GroupFilter tree from its JSON form.

    Args:
        data: Decoded JSON object
        path: Location of the node, used in error messages

    Returns:
        GroupFilter with nested filters and groups

    Raises:
        ValidationError: If the tree is structurally malformed
    """
    if not isinstance(data, dict):
        raise ValidationError(invalid_filter_node(path, "expected an object"))

    operator = _require_str(data, "operator", path)
    if operator not in _GROUP_OPERATORS:
        raise ValidationError(
            invalid_filter_node(path, f"group operator must be 'and' or 'or', got '{operator}'")
        )

    filters = tuple(
        filter_from_dict(item, f"{path}.filters[{index}]")
        for index, item in enumerate(_require_list(data, "filters", path))
    )
    groups = tuple(
        group_filter_from_dict(item, f"{path}.groups[{index}]")
        for index, item in enumerate(_require_list(data, "groups", path))
    )
    return GroupFilter(id=_require_str(data, "id", path), operator=operator, filters=filters, groups=groups)


def filter_to_dict(condition: Filter) -> dict[str, str]:
    """Convert a Filter to its JSON form."""
    return {
        "id": condition.id,
        "field": condition.field,
        "operator": condition.operator,
        "value": condition.value,
    }


def group_filter_to_dict(group: GroupFilter) -> dict[str, Any]:
    """Convert a GroupFilter tree to its JSON form."""
    return {
        "id": group.id,
        "operator": group.operator,
        "filters": [filter_to_dict(condition) for condition in group.filters],
        "groups": [group_filter_to_dict(child) for child in group.groups],
    }


def rule_action_from_dict(data: Any) -> RuleAction:
    """Build a RuleAction from its JSON form.

    Raises:
        ValidationError: If a value has the wrong type or isInternal is not yes/no
    """
    if data is None:
        return RuleAction()
    if not isinstance(data, dict):
        raise ValidationError("Invalid action: expected an object")

    for key in ("category", "notes"):
        if data.get(key) is not None and not isinstance(data[key], str):
            raise ValidationError(f"Invalid action: '{key}' must be a string")

    is_internal = data.get("isInternal")
    if is_internal is not None and is_internal not in _INTERNAL_FLAGS:
        raise ValidationError("Invalid action: 'isInternal' must be 'yes' or 'no'")

    tags = data.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise ValidationError("Invalid action: 'tags' must be a list of strings")

    return RuleAction(
        category=data.get("category"),
        is_internal=is_internal,
        notes=data.get("notes"),
        tags=tuple(tags),
    )


def rule_action_to_dict(action: RuleAction) -> dict[str, Any]:
    """Convert a RuleAction to its JSON form, omitting unset values."""
    data: dict[str, Any] = {}
    if action.category is not None:
        data["category"] = action.category
    if action.is_internal is not None:
        data["isInternal"] = action.is_internal
    if action.notes is not None:
        data["notes"] = action.notes
    if action.tags:
        data["tags"] = list(action.tags)
    return data
