"""Domain model entities for txrules.

These are pure data classes representing business concepts, independent of
database schema. Filter trees are immutable values.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction. The amount itself is never negative."""

    CREDIT = "credit"
    DEBIT = "debit"


class FieldName(str, Enum):
    """Transaction fields a filter can target."""

    DATE = "date"
    AMOUNT = "amount"
    DESCRIPTION = "description"
    CATEGORY = "category"
    TYPE = "type"
    BANK_ACCOUNT = "bankAccount"


class FieldType(str, Enum):
    """Semantic type of a field, which drives comparison semantics."""

    DATE = "date"
    NUMBER = "number"
    TEXT = "text"


class ComparisonOperator(str, Enum):
    """Operators for a single filter condition."""

    CONTAINS = "contains"
    EQUALS = "equals"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    NOT_EQUALS = "notEquals"


class GroupOperator(str, Enum):
    """Boolean combinator for a filter group."""

    AND = "and"
    OR = "or"


FIELD_TYPES: dict[str, FieldType] = {
    FieldName.DATE.value: FieldType.DATE,
    FieldName.AMOUNT.value: FieldType.NUMBER,
    FieldName.DESCRIPTION.value: FieldType.TEXT,
    FieldName.CATEGORY.value: FieldType.TEXT,
    FieldName.TYPE.value: FieldType.TEXT,
    FieldName.BANK_ACCOUNT.value: FieldType.TEXT,
}


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    date: datetime
    amount: Decimal
    description: str
    type: str
    bank_account: str
    category: Optional[str] = None
    notes: Optional[str] = None
    is_internal: bool = False
    imported_at: Optional[datetime] = None


@dataclass(frozen=True)
class Filter:
    """Atomic condition: field, operator and a value stored as text.

    ``field`` and ``operator`` are kept as plain strings so that rules saved
    with unknown names still load; the matcher treats them as non-matching.
    """

    id: str
    field: str
    operator: str
    value: str


@dataclass(frozen=True)
class GroupFilter:
    """AND/OR combination of filters and nested groups."""

    id: str
    operator: str
    filters: tuple[Filter, ...] = ()
    groups: tuple["GroupFilter", ...] = ()


@dataclass(frozen=True)
class RuleAction:
    """Field overrides applied to a transaction matched by a rule."""

    category: Optional[str] = None
    is_internal: Optional[str] = None  # "yes" / "no"
    notes: Optional[str] = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class TransactionRule:
    """Transaction rule domain entity."""

    id: int
    title: str
    filter: GroupFilter
    action: RuleAction
    order: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RuleMatchCount:
    """Number of transactions a single rule matched in one run."""

    rule_id: int
    rule_title: str
    count: int


@dataclass(frozen=True)
class ApplyRulesResult:
    """Outcome of applying rules to a batch of transactions."""

    message: str
    updated: int
    skipped: int
    errors: list[tuple[int, str]] = field(default_factory=list)
    rule_breakdown: list[RuleMatchCount] = field(default_factory=list)
    preview: bool = False
