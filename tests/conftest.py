"""Shared pytest fixtures for txrules tests."""

import tempfile
import os
from pathlib import Path
from datetime import datetime
from decimal import Decimal
import pytest

from txrules.database.factories import create_sqlite_database
from txrules.domain.entities import Filter, GroupFilter, RuleAction, Transaction
from txrules.domain.rule import RuleService
from txrules.domain.rule_application import RuleApplicationService
from txrules.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def rule_service(temp_db):
    """Create a RuleService with a temporary database."""
    return RuleService(temp_db)


@pytest.fixture
def application_service(temp_db):
    """Create a RuleApplicationService with a temporary database."""
    return RuleApplicationService(temp_db)


@pytest.fixture
def coffee_transaction():
    """An in-memory debit transaction without a category."""
    return Transaction(
        id=1,
        date=datetime(2024, 1, 15, 23, 59),
        amount=Decimal("4.50"),
        description="Morning coffee run",
        type="debit",
        bank_account="Checking",
    )


@pytest.fixture
def sample_transactions(transaction_service):
    """Store a few transactions and return their IDs keyed by a short name."""
    rows = {
        "coffee": (datetime(2024, 1, 15, 8, 30), "4.50", "Morning Coffee Run", "debit", "Checking"),
        "rent": (datetime(2024, 1, 1), "1500.00", "Rent January", "debit", "Checking"),
        "salary": (datetime(2024, 1, 31), "3000.00", "ACME Corp Salary", "credit", "Checking"),
        "transfer": (datetime(2024, 2, 2), "200.00", "Transfer to savings", "debit", "Savings"),
    }
    ids = {}
    for name, (date, amount, description, txn_type, account) in rows.items():
        ids[name] = transaction_service.create_transaction(
            date=date,
            amount=Decimal(amount),
            description=description,
            type=txn_type,
            bank_account=account,
        )
    return ids


def make_group(operator="and", filters=(), groups=(), group_id="root"):
    """Build a GroupFilter from (field, operator, value) triples."""
    return GroupFilter(
        id=group_id,
        operator=operator,
        filters=tuple(
            Filter(id=f"{group_id}-f{index}", field=field, operator=op, value=value)
            for index, (field, op, value) in enumerate(filters)
        ),
        groups=tuple(groups),
    )


@pytest.fixture
def group():
    """Expose the group builder to tests."""
    return make_group


@pytest.fixture
def sample_rules(rule_service):
    """Create coffee, rent and transfer rules in that priority order."""
    coffee = rule_service.create_rule(
        title="Coffee",
        filter=make_group("and", [("description", "contains", "coffee")]),
        action=RuleAction(category="Eating Out", notes="caffeine"),
    )
    big_debits = rule_service.create_rule(
        title="Big debits",
        filter=make_group(
            "and", [("type", "equals", "debit"), ("amount", "greaterThan", "1000")]
        ),
        action=RuleAction(category="Housing"),
    )
    transfers = rule_service.create_rule(
        title="Transfers",
        filter=make_group("or", [("description", "startsWith", "transfer"), ("bankAccount", "equals", "savings")]),
        action=RuleAction(category="Transfer", is_internal="yes"),
    )
    return {"coffee": coffee, "big_debits": big_debits, "transfers": transfers}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Directory holding CSV and filter JSON fixtures."""
    return Path(__file__).parent / "fixtures"
