"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import datetime
from decimal import Decimal

from txrules.domain.entities import Transaction, TransactionRule


class Database(ABC):
    """Abstract database interface for txrules."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: datetime,
        amount: Decimal,
        description: str,
        type: str,
        bank_account: str,
        category: Optional[str] = None,
        notes: Optional[str] = None,
        is_internal: bool = False,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transactions_by_ids(self, transaction_ids: list[int]) -> list[Transaction]:
        """Get the existing transactions among the given IDs, in ID order."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        category: Optional[str] = None,
        bank_account: Optional[str] = None,
        uncategorized: bool = False,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, updates: dict[str, Any]) -> None:
        """Update the given fields of a transaction.

        Args:
            transaction_id: Transaction ID
            updates: Mapping of field name (category, notes, is_internal,
                description, ...) to new value
        """
        pass

    # Transaction rule operations
    @abstractmethod
    def create_rule(
        self, title: str, filter: dict[str, Any], action: dict[str, Any], order: int
    ) -> int:
        """Create a transaction rule. Returns rule ID."""
        pass

    @abstractmethod
    def get_rule(self, rule_id: int) -> Optional[TransactionRule]:
        """Get transaction rule by ID."""
        pass

    @abstractmethod
    def list_rules(self) -> list[TransactionRule]:
        """List rules by priority: order ascending, newest first on ties."""
        pass

    @abstractmethod
    def get_max_rule_order(self) -> Optional[int]:
        """Get the highest order value in use, or None when there are no rules."""
        pass

    @abstractmethod
    def update_rule(self, rule_id: int, updates: dict[str, Any]) -> None:
        """Update the given fields of a rule and bump its updated_at."""
        pass

    @abstractmethod
    def delete_rule(self, rule_id: int) -> None:
        """Delete a rule and close the gap it leaves in the ordering."""
        pass

    @abstractmethod
    def update_rule_orders(self, orders: dict[int, int]) -> None:
        """Set the order of several rules in one commit."""
        pass
