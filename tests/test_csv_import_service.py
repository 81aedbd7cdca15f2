"""Tests for CSV import with rule-based auto-categorization."""

from datetime import datetime
from decimal import Decimal

import pytest

from txrules.domain.csv_import import CSVImportService
from txrules.domain.errors import ValidationError


@pytest.fixture
def import_service(temp_db):
    return CSVImportService(temp_db)


def write_csv(tmp_path, content, name="statement.csv"):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


def by_description(transaction_service):
    return {txn.description: txn for txn in transaction_service.list_transactions()}


def test_import_applies_first_matching_rule(tmp_path, import_service, transaction_service, sample_rules):
    csv_path = write_csv(
        tmp_path,
        "Date,Description,Amount\n"
        "2024-03-01,Coffee at the station,-3.20\n"
        "2024-03-02,March rent,-1800.00\n"
        "2024-03-03,Salary March,2500.00\n"
        "2024-03-04,Transfer to savings,-100.00\n",
    )

    result = import_service.import_csv(csv_path, bank_account="Checking")

    assert result == {"imported": 4, "categorized": 3, "errors": []}

    stored = by_description(transaction_service)
    assert stored["Coffee at the station"].category == "Eating Out"
    assert stored["Coffee at the station"].notes == "caffeine"
    assert stored["March rent"].category == "Housing"
    assert stored["Salary March"].category is None
    assert stored["Transfer to savings"].category == "Transfer"
    assert stored["Transfer to savings"].is_internal is True


def test_import_derives_type_from_sign(tmp_path, import_service, transaction_service):
    csv_path = write_csv(
        tmp_path,
        "Date,Description,Amount\n"
        "2024-03-01,Groceries,-42.10\n"
        "2024-03-02,Refund,15.00\n",
    )

    import_service.import_csv(csv_path, bank_account="Checking")

    stored = by_description(transaction_service)
    assert stored["Groceries"].type == "debit"
    assert stored["Groceries"].amount == Decimal("42.10")
    assert stored["Refund"].type == "credit"
    assert stored["Refund"].amount == Decimal("15.00")


def test_import_without_rules(tmp_path, import_service, transaction_service, sample_rules):
    csv_path = write_csv(tmp_path, "Date,Description,Amount\n2024-03-01,Coffee,-3.20\n")

    result = import_service.import_csv(csv_path, bank_account="Checking", apply_rules=False)

    assert result["imported"] == 1
    assert result["categorized"] == 0
    assert by_description(transaction_service)["Coffee"].category is None


def test_import_with_optional_columns(tmp_path, import_service, transaction_service):
    """Type, bank account, category and notes columns are read when present."""
    csv_path = write_csv(
        tmp_path,
        "Date,Description,Amount,Type,Bank Account,Category,Notes\n"
        "15/01/2024,Book shop,-25.00,Debit,Savings,Books,gift\n",
    )

    result = import_service.import_csv(csv_path)

    assert result["imported"] == 1
    txn = by_description(transaction_service)["Book shop"]
    assert txn.date == datetime(2024, 1, 15)
    assert txn.amount == Decimal("25.00")
    assert txn.type == "debit"
    assert txn.bank_account == "Savings"
    assert txn.category == "Books"
    assert txn.notes == "gift"


def test_import_rule_overrides_csv_category(tmp_path, import_service, transaction_service, sample_rules):
    csv_path = write_csv(
        tmp_path,
        "Date,Description,Amount,Category\n2024-03-01,Coffee beans,-12.00,Groceries\n",
    )

    import_service.import_csv(csv_path, bank_account="Checking")

    assert by_description(transaction_service)["Coffee beans"].category == "Eating Out"


def test_import_semicolon_delimiter(tmp_path, import_service, transaction_service):
    csv_path = write_csv(
        tmp_path,
        "date;description;amount\n2024-03-01;Bakery;-4.00\n2024-03-02;Cinema;-11.50\n",
    )

    result = import_service.import_csv(csv_path, bank_account="Checking")

    assert result["imported"] == 2
    assert set(by_description(transaction_service)) == {"Bakery", "Cinema"}


def test_import_collects_row_errors(tmp_path, import_service, transaction_service):
    csv_path = write_csv(
        tmp_path,
        "Date,Description,Amount\n"
        "garbage,Bad date,-1.00\n"
        "2024-03-02,Bad amount,lots\n"
        "2024-03-03,,-2.00\n"
        "2024-03-04,Fine,-3.00\n",
    )

    result = import_service.import_csv(csv_path, bank_account="Checking")

    assert result["imported"] == 1
    assert len(result["errors"]) == 3
    assert result["errors"][0].startswith("Row 2:")
    assert result["errors"][1].startswith("Row 3:")
    assert result["errors"][2] == "Row 4: Missing description"
    assert list(by_description(transaction_service)) == ["Fine"]


def test_import_requires_bank_account(tmp_path, import_service):
    csv_path = write_csv(tmp_path, "Date,Description,Amount\n2024-03-01,Coffee,-3.20\n")

    result = import_service.import_csv(csv_path)

    assert result["imported"] == 0
    assert "bank account" in result["errors"][0]


def test_import_missing_columns(tmp_path, import_service):
    csv_path = write_csv(tmp_path, "Date,Description\n2024-03-01,Coffee\n")

    with pytest.raises(ValidationError, match="missing required columns: amount"):
        import_service.import_csv(csv_path, bank_account="Checking")


def test_import_missing_file(tmp_path, import_service):
    with pytest.raises(FileNotFoundError):
        import_service.import_csv(str(tmp_path / "nope.csv"))
