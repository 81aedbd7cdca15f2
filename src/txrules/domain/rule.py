"""Transaction rule domain service."""

import logging
from typing import Optional
from txrules.database.base import Database
from txrules.domain.entities import GroupFilter, RuleAction, TransactionRule
from txrules.domain.errors import NotFoundError, ValidationError, rule_not_found
from txrules.domain.filter_tree import group_filter_to_dict, rule_action_to_dict

logger = logging.getLogger(__name__)


class RuleService:
    """Service for managing transaction rules and their priority order."""

    def __init__(self, db: Database):
        """Initialize rule service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_rule(
        self,
        title: str,
        filter: GroupFilter,
        action: RuleAction,
        order: Optional[int] = None,
    ) -> int:
        """Create a transaction rule.

        Args:
            title: Rule title
            filter: Filter tree deciding which transactions match
            action: Overrides applied to matching transactions
            order: Priority (lower runs first). Defaults to after the last rule.

        Returns:
            Rule ID

        Raises:
            ValidationError: If the title is empty
        """
        if not title or not title.strip():
            raise ValidationError("Title is required")

        if order is None:
            max_order = self.db.get_max_rule_order()
            order = 0 if max_order is None else max_order + 1

        rule_id = self.db.create_rule(
            title=title.strip(),
            filter=group_filter_to_dict(filter),
            action=rule_action_to_dict(action),
            order=order,
        )
        logger.info("Created rule %s '%s' at order %d", rule_id, title, order)
        return rule_id

    def get_rule(self, rule_id: int) -> Optional[TransactionRule]:
        """Get rule by ID, or None if not found."""
        return self.db.get_rule(rule_id)

    def require_rule(self, rule_id: int) -> TransactionRule:
        """Get rule by ID or raise NotFoundError."""
        rule = self.db.get_rule(rule_id)
        if rule is None:
            raise NotFoundError(rule_not_found(rule_id))
        return rule

    def list_rules(self) -> list[TransactionRule]:
        """List rules in priority order."""
        return self.db.list_rules()

    def update_rule(
        self,
        rule_id: int,
        title: Optional[str] = None,
        filter: Optional[GroupFilter] = None,
        action: Optional[RuleAction] = None,
        order: Optional[int] = None,
    ) -> None:
        """Update rule fields.

        Only the provided fields are changed.

        Raises:
            NotFoundError: If the rule doesn't exist
            ValidationError: If the new title is empty
        """
        self.require_rule(rule_id)

        updates: dict[str, object] = {}
        if title is not None:
            if not title.strip():
                raise ValidationError("Title is required")
            updates["title"] = title.strip()
        if filter is not None:
            updates["filter"] = group_filter_to_dict(filter)
        if action is not None:
            updates["action"] = rule_action_to_dict(action)
        if order is not None:
            updates["order"] = order

        self.db.update_rule(rule_id, updates)

    def delete_rule(self, rule_id: int) -> TransactionRule:
        """Delete a rule; rules after it move up one place.

        Returns:
            The deleted rule

        Raises:
            NotFoundError: If the rule doesn't exist
        """
        rule = self.require_rule(rule_id)
        self.db.delete_rule(rule_id)
        logger.info("Deleted rule %s '%s'", rule_id, rule.title)
        return rule

    def reorder_rules(self, orders: dict[int, int]) -> list[TransactionRule]:
        """Assign new orders to rules.

        Args:
            orders: Mapping of rule ID to new order

        Returns:
            All rules in their new priority order

        Raises:
            NotFoundError: If any rule ID is unknown (nothing is changed)
        """
        if orders:
            self.db.update_rule_orders(orders)
        return self.db.list_rules()
