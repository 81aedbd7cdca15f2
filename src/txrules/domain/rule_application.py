"""Rule application domain service.

Drives the matcher over stored transactions: either a priority cascade where
the first matching rule wins, or a single rule applied to every transaction.
"""

import logging
from typing import Any, Iterable, Optional

from txrules.database.base import Database
from txrules.domain.entities import (
    ApplyRulesResult,
    RuleAction,
    RuleMatchCount,
    Transaction,
    TransactionRule,
)
from txrules.domain.errors import NotFoundError, ValidationError
from txrules.domain.matcher import matches_group_filter
from txrules.domain.rule import RuleService
from txrules.domain.transaction import TransactionService

logger = logging.getLogger(__name__)


def find_matching_rule(
    transaction: Transaction, rules: Iterable[TransactionRule]
) -> Optional[TransactionRule]:
    """Return the first rule whose filter matches the transaction.

    Args:
        transaction: Transaction to test
        rules: Rules in priority order

    Returns:
        The matching rule, or None
    """
    for rule in rules:
        if matches_group_filter(transaction, rule.filter):
            return rule
    return None


def build_updates(action: RuleAction) -> dict[str, Any]:
    """Translate a rule action into transaction field updates.

    Empty category and notes are ignored; the internal flag is applied
    whenever it is set.
    """
    updates: dict[str, Any] = {}
    if action.notes:
        updates["notes"] = action.notes
    if action.is_internal is not None:
        updates["is_internal"] = action.is_internal == "yes"
    if action.category:
        updates["category"] = action.category
    return updates


class RuleApplicationService:
    """Service for applying transaction rules to stored transactions."""

    def __init__(self, db: Database):
        """Initialize rule application service.

        Args:
            db: Database instance
        """
        self.db = db
        self.rule_service = RuleService(db)
        self.transaction_service = TransactionService(db)

    def _update(self, transaction: Transaction, rule: TransactionRule) -> Optional[str]:
        """Apply a rule's action to a stored transaction.

        Returns:
            None on success, otherwise the error message
        """
        updates = build_updates(rule.action)
        if not updates:
            return None
        try:
            self.db.update_transaction(transaction.id, updates)
        except Exception as e:
            logger.warning(
                "Failed to apply rule %s to transaction %s: %s", rule.id, transaction.id, e
            )
            return str(e) or "Failed to update transaction"
        return None

    def apply_rules(self, transaction_ids: list[int], preview: bool = False) -> ApplyRulesResult:
        """Apply rules in priority order to the selected transactions.

        Each transaction gets the action of the first rule that matches it.
        A failed update is recorded and does not stop the remaining
        transactions.

        Args:
            transaction_ids: IDs of transactions to process
            preview: If True, count matches without changing anything

        Returns:
            ApplyRulesResult with counts, errors and a per-rule breakdown

        Raises:
            ValidationError: If no transaction IDs are given
            NotFoundError: If none of the transactions exist
        """
        if not transaction_ids:
            raise ValidationError("At least one transaction ID is required")

        rules = self.rule_service.list_rules()
        if not rules:
            return ApplyRulesResult(
                message="No transaction rules found",
                updated=0,
                skipped=len(transaction_ids),
                preview=preview,
            )

        transactions = self.transaction_service.get_transactions_by_ids(transaction_ids)
        if not transactions:
            raise NotFoundError("No transactions found")

        updated = 0
        skipped = 0
        errors: list[tuple[int, str]] = []
        breakdown: dict[int, int] = {}

        for transaction in transactions:
            rule = find_matching_rule(transaction, rules)
            if rule is None:
                skipped += 1
                continue

            logger.debug("Transaction %s matched rule %s", transaction.id, rule.id)
            breakdown[rule.id] = breakdown.get(rule.id, 0) + 1

            if preview:
                updated += 1
                continue

            error = self._update(transaction, rule)
            if error is None:
                updated += 1
            else:
                errors.append((transaction.id, error))
                skipped += 1

        titles = {rule.id: rule.title for rule in rules}
        if preview:
            message = f"Preview: {updated} transaction(s) would be updated"
        else:
            message = f"Applied rules to {updated} transaction(s)"
        logger.info("%s, %d skipped, %d error(s)", message, skipped, len(errors))

        return ApplyRulesResult(
            message=message,
            updated=updated,
            skipped=skipped,
            errors=errors,
            rule_breakdown=[
                RuleMatchCount(rule_id=rule_id, rule_title=titles[rule_id], count=count)
                for rule_id, count in breakdown.items()
            ],
            preview=preview,
        )

    def apply_rule(self, rule_id: int) -> ApplyRulesResult:
        """Apply one rule to every stored transaction.

        Unlike apply_rules, there is no priority cascade: every transaction
        the rule matches is updated.

        Raises:
            NotFoundError: If the rule doesn't exist
        """
        rule = self.rule_service.require_rule(rule_id)

        transactions = self.transaction_service.list_transactions()
        if not transactions:
            return ApplyRulesResult(message="No transactions found", updated=0, skipped=0)

        updated = 0
        skipped = 0
        errors: list[tuple[int, str]] = []

        for transaction in transactions:
            if not matches_group_filter(transaction, rule.filter):
                skipped += 1
                continue

            error = self._update(transaction, rule)
            if error is None:
                updated += 1
            else:
                errors.append((transaction.id, error))
                skipped += 1

        message = f"Applied rule to {updated} transaction(s)"
        logger.info("Rule %s: %s, %d skipped", rule_id, message, skipped)
        return ApplyRulesResult(message=message, updated=updated, skipped=skipped, errors=errors)
