"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including decoding of the JSON
filter trees stored with each rule.
"""

from txrules.domain import entities as domain
from txrules.domain.filter_tree import group_filter_from_dict, rule_action_from_dict
from txrules.database.models import (
    Transaction as ORMTransaction,
    TransactionRule as ORMTransactionRule,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        description=orm_transaction.description,
        type=orm_transaction.type,
        bank_account=orm_transaction.bank_account,
        category=orm_transaction.category,
        notes=orm_transaction.notes,
        is_internal=bool(orm_transaction.is_internal),
        imported_at=orm_transaction.imported_at,
    )


def transaction_rule_to_domain(orm_rule: ORMTransactionRule) -> domain.TransactionRule:
    """Convert SQLAlchemy TransactionRule model to domain TransactionRule entity."""
    return domain.TransactionRule(
        id=orm_rule.id,
        title=orm_rule.title,
        filter=group_filter_from_dict(orm_rule.filter),
        action=rule_action_from_dict(orm_rule.action),
        order=orm_rule.order,
        created_at=orm_rule.created_at,
        updated_at=orm_rule.updated_at,
    )
