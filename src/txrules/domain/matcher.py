"""Transaction rule matching engine.

Decides whether a transaction satisfies a rule's filter tree. Everything in
this module is pure and total: unknown fields, unknown operators and
unparsable values end up as a non-match, never as an exception.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from itertools import chain
from operator import ge, gt, le, lt
from typing import Any, Union

from dateutil import parser as date_parser

from txrules.domain.entities import (
    FIELD_TYPES,
    ComparisonOperator,
    FieldName,
    FieldType,
    Filter,
    GroupFilter,
    GroupOperator,
)
from txrules.utils.date_parser import to_naive_utc


class _InvalidDate:
    """A date that could not be parsed. It equals and orders against nothing."""

    def __repr__(self) -> str:
        return "INVALID_DATE"

    def __str__(self) -> str:
        return "Invalid Date"


INVALID_DATE = _InvalidDate()

FieldValue = Union[str, float, datetime, _InvalidDate, None]

_ORDERINGS = {
    ComparisonOperator.GREATER_THAN.value: gt,
    ComparisonOperator.LESS_THAN.value: lt,
    ComparisonOperator.GREATER_THAN_OR_EQUAL.value: ge,
    ComparisonOperator.LESS_THAN_OR_EQUAL.value: le,
}

# Transaction attribute and record key for each text field
_TEXT_FIELDS = {
    FieldName.DESCRIPTION.value: ("description", "description"),
    FieldName.CATEGORY.value: ("category", "category"),
    FieldName.TYPE.value: ("type", "type"),
    FieldName.BANK_ACCOUNT.value: ("bank_account", "bankAccount"),
}


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _read(record: Any, attribute: str, key: str) -> Any:
    """Read a field from a domain entity or a plain mapping record."""
    if isinstance(record, Mapping):
        return record.get(key, record.get(attribute))
    return getattr(record, attribute, None)


def _to_datetime(value: Any) -> datetime | _InvalidDate:
    """Coerce to a naive UTC datetime; anything unparsable, None included, is INVALID_DATE."""
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return to_naive_utc(date_parser.parse(value))
        except (ValueError, OverflowError):
            return INVALID_DATE
    return INVALID_DATE


def _to_number(value: Any) -> float:
    """Convert to float; blank text is zero and anything unparsable is NaN."""
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _render(value: Any) -> str:
    """Lower-cased text form used by the string comparisons."""
    if isinstance(value, datetime):
        text = value.isoformat()
    elif isinstance(value, float):
        text = str(int(value)) if math.isfinite(value) and value.is_integer() else str(value)
    else:
        text = str(value)
    return text.lower()


def field_type_for(field: str) -> FieldType:
    """Return the semantic type of a field name (text for unknown names)."""
    return FIELD_TYPES.get(_plain(field), FieldType.TEXT)


def get_field_value(transaction: Any, field: str) -> FieldValue:
    """Extract the value of ``field`` from a transaction.

    Args:
        transaction: Transaction entity or a mapping with the same fields
            (camelCase ``bankAccount`` is accepted for mappings)
        field: Field name

    Returns:
        A datetime for ``date``, a float for ``amount``, a string for text
        fields (empty when absent) and None for unknown field names. A date
        that is missing or cannot be coerced is INVALID_DATE.
    """
    name = _plain(field)
    if name == FieldName.DATE.value:
        return _to_datetime(_read(transaction, "date", "date"))
    if name == FieldName.AMOUNT.value:
        return _to_number(_read(transaction, "amount", "amount"))
    if name in _TEXT_FIELDS:
        attribute, key = _TEXT_FIELDS[name]
        value = _read(transaction, attribute, key)
        return _plain(value) if value else ""
    return None


def _convert_filter_value(value: str, field_type: FieldType) -> Any:
    if field_type == FieldType.DATE:
        return _to_datetime(value)
    if field_type == FieldType.NUMBER:
        return _to_number(value)
    return value


def _exact_match(transaction_value: Any, filter_value: Any, field_type: FieldType) -> bool:
    """Typed equality: same calendar day for dates, numeric equality for numbers.

    Invalid dates and NaN never equal anything.
    """
    if field_type == FieldType.DATE:
        return (
            isinstance(transaction_value, datetime)
            and isinstance(filter_value, datetime)
            and transaction_value.date() == filter_value.date()
        )
    return _is_number(transaction_value) and _is_number(filter_value) and transaction_value == filter_value


def compare_values(
    transaction_value: FieldValue,
    filter_value: str,
    operator: str,
    field_type: FieldType,
) -> bool:
    """Compare a transaction value with a filter value.

    Args:
        transaction_value: Value returned by get_field_value
        filter_value: Filter value as stored (always text)
        operator: Comparison operator name
        field_type: Semantic type of the field being compared

    Returns:
        True if the comparison holds
    """
    operator = _plain(operator)

    # An absent value "equals" and "not-equals" anything
    if transaction_value is None:
        return operator in (ComparisonOperator.EQUALS.value, ComparisonOperator.NOT_EQUALS.value)

    if field_type == FieldType.DATE:
        transaction_value = _to_datetime(transaction_value)
    elif isinstance(transaction_value, datetime):
        transaction_value = to_naive_utc(transaction_value)
    converted = _convert_filter_value(filter_value, field_type)
    left = _render(transaction_value)
    right = _render(converted)

    if operator == ComparisonOperator.CONTAINS.value:
        return right in left
    if operator == ComparisonOperator.STARTS_WITH.value:
        return left.startswith(right)
    if operator == ComparisonOperator.ENDS_WITH.value:
        return left.endswith(right)

    if operator in (ComparisonOperator.EQUALS.value, ComparisonOperator.NOT_EQUALS.value):
        if field_type in (FieldType.DATE, FieldType.NUMBER):
            same = _exact_match(transaction_value, converted, field_type)
        else:
            same = left == right
        return same if operator == ComparisonOperator.EQUALS.value else not same

    ordering = _ORDERINGS.get(operator)
    if ordering is None:
        return False
    if transaction_value is INVALID_DATE or converted is INVALID_DATE:
        return False
    both_dates = isinstance(transaction_value, datetime) and isinstance(converted, datetime)
    both_numbers = _is_number(transaction_value) and _is_number(converted)
    if both_dates or both_numbers:
        return ordering(transaction_value, converted)
    return ordering(left, right)


def matches_filter(transaction: Any, condition: Filter) -> bool:
    """Check if a transaction satisfies a single filter condition.

    A text field that is not set on the transaction at all (as opposed to
    set to an empty string) is compared as a missing value.
    """
    name = _plain(condition.field)
    if name in _TEXT_FIELDS and _read(transaction, *_TEXT_FIELDS[name]) is None:
        value = None
    else:
        value = get_field_value(transaction, condition.field)
    return compare_values(value, condition.value, condition.operator, field_type_for(condition.field))


def matches_group_filter(transaction: Any, group: GroupFilter) -> bool:
    """Check if a transaction satisfies a filter group, recursively.

    A group without filters and without nested groups never matches. Filters
    are evaluated before nested groups, in order, stopping as soon as the
    result is known.
    """
    filters = group.filters or ()
    groups = group.groups or ()
    if not filters and not groups:
        return False

    results = chain(
        (matches_filter(transaction, condition) for condition in filters),
        (matches_group_filter(transaction, child) for child in groups),
    )
    if _plain(group.operator) == GroupOperator.AND.value:
        return all(results)
    return any(results)
