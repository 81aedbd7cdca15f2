"""CSV import domain service."""

import csv
import logging
from typing import Any, Optional
from pathlib import Path

from txrules.database.base import Database
from txrules.domain.errors import ValidationError
from txrules.domain.rule import RuleService
from txrules.domain.rule_application import build_updates, find_matching_rule
from txrules.domain.transaction import TransactionService
from txrules.utils.date_parser import parse_date
from txrules.utils.amount_parser import parse_amount, split_signed_amount

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "description", "amount")
OPTIONAL_COLUMNS = ("type", "bankaccount", "category", "notes")


def _normalize_header(name: str) -> str:
    """Normalize a header so "Bank Account", "bank_account" and "bankAccount" agree."""
    return name.strip().lower().replace(" ", "").replace("_", "")


class CSVImportService:
    """Service for importing CSV files and auto-categorizing them with rules."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)
        self.rule_service = RuleService(db)

    def import_csv(
        self,
        csv_file_path: str,
        bank_account: Optional[str] = None,
        apply_rules: bool = True,
    ) -> dict[str, Any]:
        """Import transactions from a CSV file.

        The file needs date, description and amount columns. Without a type
        column the sign of the amount decides between debit and credit. Every
        new transaction is tested against the rules in priority order and the
        first matching rule's action is applied before it is stored.

        Args:
            csv_file_path: Path to CSV file
            bank_account: Bank account for rows without a bank account column
            apply_rules: If False, store rows without running the rules

        Returns:
            Dict with import statistics:
            - imported: number of transactions imported
            - categorized: number of imported transactions matched by a rule
            - errors: list of error messages

        Raises:
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        rules = self.rule_service.list_rules() if apply_rules else []

        imported = 0
        categorized = 0
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            # Try to detect delimiter
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError("CSV file has no columns")

            columns = {_normalize_header(name): name for name in reader.fieldnames if name}
            missing_columns = [col for col in REQUIRED_COLUMNS if col not in columns]
            if missing_columns:
                raise ValidationError(
                    f"CSV file missing required columns: {', '.join(missing_columns)}"
                )

            for row_num, row in enumerate(reader, start=2):  # Start at 2 (header is row 1)
                values = {}
                for key in REQUIRED_COLUMNS + OPTIONAL_COLUMNS:
                    raw = row.get(columns[key]) if key in columns else None
                    values[key] = raw.strip() if raw and raw.strip() else None

                try:
                    record = self._build_record(values, bank_account)
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    continue

                rule = find_matching_rule(record, rules)
                if rule is not None:
                    logger.debug("Row %d matched rule %s '%s'", row_num, rule.id, rule.title)
                    record.update(build_updates(rule.action))
                    categorized += 1

                try:
                    self.transaction_service.create_transaction(
                        date=record["date"],
                        amount=record["amount"],
                        description=record["description"],
                        type=record["type"],
                        bank_account=record["bank_account"],
                        category=record.get("category"),
                        notes=record.get("notes"),
                        is_internal=record.get("is_internal", False),
                    )
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    if rule is not None:
                        categorized -= 1
                    continue
                imported += 1

        logger.info(
            "Imported %d transaction(s) from %s, %d categorized by rules, %d error(s)",
            imported,
            csv_path.name,
            categorized,
            len(errors),
        )
        return {
            "imported": imported,
            "categorized": categorized,
            "errors": errors,
        }

    def _build_record(
        self, values: dict[str, Optional[str]], default_bank_account: Optional[str]
    ) -> dict[str, Any]:
        """Parse one CSV row into a transaction record.

        Raises:
            ValueError: If a value is missing or cannot be parsed
        """
        for key in REQUIRED_COLUMNS:
            if not values.get(key):
                raise ValueError(f"Missing {key}")

        txn_date = parse_date(values["date"])
        amount = parse_amount(values["amount"])

        if values.get("type"):
            txn_type = values["type"].lower()
            amount = abs(amount)
        else:
            amount, signed_type = split_signed_amount(amount)
            txn_type = signed_type.value

        bank_account = values.get("bankaccount") or default_bank_account
        if not bank_account:
            raise ValueError("Missing bank account (add a column or pass a default)")

        return {
            "date": txn_date,
            "amount": amount,
            "description": values["description"],
            "type": txn_type,
            "bank_account": bank_account,
            "category": values.get("category"),
            "notes": values.get("notes"),
        }
