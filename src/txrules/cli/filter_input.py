"""CLI helpers for reading filter trees and rule actions from options."""

import json
from pathlib import Path
from typing import Optional

from txrules.domain.entities import Filter, GroupFilter, GroupOperator, RuleAction
from txrules.domain.errors import ValidationError
from txrules.domain.filter_tree import group_filter_from_dict


def load_filter_json(text: str) -> GroupFilter:
    """Parse a filter tree given inline or as @path/to/file.json.

    Raises:
        ValidationError: If the file is missing or the JSON is malformed
    """
    if text.startswith("@"):
        path = Path(text[1:])
        if not path.exists():
            raise ValidationError(f"Filter file not found: {path}")
        text = path.read_text(encoding="utf-8")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Filter is not valid JSON: {e}")
    return group_filter_from_dict(data)


def build_filter(
    filter_json: Optional[str],
    conditions: tuple[tuple[str, str, str], ...],
    match_any: bool,
) -> Optional[GroupFilter]:
    """Build a filter tree from --filter or from repeated --where conditions.

    Returns:
        GroupFilter, or None if neither option was given

    Raises:
        ValidationError: If both --filter and --where are given
    """
    if filter_json and conditions:
        raise ValidationError("Use either --filter or --where, not both")
    if filter_json:
        return load_filter_json(filter_json)
    if not conditions:
        return None

    filters = tuple(
        Filter(id=f"f{index}", field=field, operator=operator, value=value)
        for index, (field, operator, value) in enumerate(conditions, start=1)
    )
    operator = GroupOperator.OR if match_any else GroupOperator.AND
    return GroupFilter(id="root", operator=operator.value, filters=filters)


def build_action(
    category: Optional[str], notes: Optional[str], internal: Optional[str]
) -> RuleAction:
    """Build a rule action from CLI options."""
    return RuleAction(category=category, is_internal=internal, notes=notes)
