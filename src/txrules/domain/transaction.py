"""Transaction domain service."""

from typing import Optional
from datetime import datetime
from decimal import Decimal
from txrules.database.base import Database
from txrules.domain.entities import Transaction as TransactionEntity, TransactionType
from txrules.domain.errors import NotFoundError, ValidationError, transaction_not_found

_TRANSACTION_TYPES = {t.value for t in TransactionType}


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Create a transaction.

        Args:
            date: Transaction date and time
            amount: Transaction amount (not negative, direction is given by type)
            description: Description
            type: "credit" or "debit"
            bank_account: Bank account name
            category: Optional category name
            notes: Optional notes
            is_internal: Whether this is an internal transfer

        Returns:
            Transaction ID

        Raises:
            ValidationError: If a required value is missing or invalid
        """
        if not description or not description.strip():
            raise ValidationError("Description is required")
        if not bank_account or not bank_account.strip():
            raise ValidationError("Bank account is required")
        type_value = type.value if isinstance(type, TransactionType) else type
        if type_value not in _TRANSACTION_TYPES:
            raise ValidationError(f"Transaction type must be 'credit' or 'debit', got '{type_value}'")
        if amount < 0:
            raise ValidationError("Amount must not be negative")

        return self.db.create_transaction(
            date=date,
            amount=amount,
            description=description,
            type=type_value,
            bank_account=bank_account,
            category=category,
            notes=notes,
            is_internal=is_internal,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def get_transactions_by_ids(self, transaction_ids: list[int]) -> list[TransactionEntity]:
        """Get the transactions that exist among the given IDs."""
        return self.db.get_transactions_by_ids(transaction_ids)

    def list_transactions(
        self,
        category: Optional[str] = None,
        bank_account: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters.

        Args:
            category: Optional category filter (empty string for uncategorized)
            bank_account: Optional bank account filter

        Returns:
            List of transaction entities, newest first
        """
        if category == "":
            return self.db.list_transactions(bank_account=bank_account, uncategorized=True)
        return self.db.list_transactions(category=category, bank_account=bank_account)

    def update_transaction(
        self,
        transaction_id: int,
        category: Optional[str] = None,
        notes: Optional[str] = None,
        is_internal: Optional[bool] = None,
        clear_category: bool = False,
    ) -> None:
        """Update transaction fields.

        Only the provided fields are changed.

        Args:
            transaction_id: Transaction ID to update
            category: Optional new category
            notes: Optional new notes
            is_internal: Optional new internal flag
            clear_category: If True, clear the category (category must be None)

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If both category and clear_category are given
        """
        if clear_category and category is not None:
            raise ValidationError("Cannot set both category and clear_category")

        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        updates: dict[str, object] = {}
        if clear_category:
            updates["category"] = None
        elif category is not None:
            updates["category"] = category
        if notes is not None:
            updates["notes"] = notes
        if is_internal is not None:
            updates["is_internal"] = is_internal

        if updates:
            self.db.update_transaction(transaction_id, updates)
