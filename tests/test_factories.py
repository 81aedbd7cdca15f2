"""Tests for database construction."""

from pathlib import Path

import txrules
from txrules.cli.main import main
from txrules.database.factories import create_sqlite_database, resolve_database_path


def test_explicit_path_wins(monkeypatch, tmp_path):
    monkeypatch.setenv("TXRULES_DB_PATH", str(tmp_path / "env.db"))
    assert resolve_database_path(str(tmp_path / "cli.db")) == tmp_path / "cli.db"


def test_environment_path(monkeypatch, tmp_path):
    monkeypatch.setenv("TXRULES_DB_PATH", str(tmp_path / "env.db"))
    assert resolve_database_path() == tmp_path / "env.db"


def test_default_path_under_home(monkeypatch, tmp_path):
    """Test that the default location is created under the home directory."""
    monkeypatch.delenv("TXRULES_DB_PATH", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    path = resolve_database_path()

    assert path == tmp_path / ".txrules" / "txrules.db"
    assert path.parent.is_dir()


def test_create_sqlite_database(tmp_path):
    db_path = tmp_path / "rules.db"
    db = create_sqlite_database(str(db_path))
    assert db.database_url == f"sqlite:///{db_path}"

    db.connect()
    db.initialize_schema()
    assert db.list_rules() == []
    db.disconnect()
    assert Path(db_path).exists()


def test_package_exposes_cli_entry_point():
    assert txrules.main is main
