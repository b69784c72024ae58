"""Tests for database factory functions."""

from pathlib import Path

from ledgerline.database.factories import create_sqlite_database, sqlite_url


def test_sqlite_url_from_path():
    assert sqlite_url("/tmp/books.db") == "sqlite:////tmp/books.db"


def test_sqlite_url_expands_home():
    assert sqlite_url("~/books.db") == f"sqlite:///{Path.home() / 'books.db'}"


def test_sqlite_url_passes_urls_through():
    assert sqlite_url("sqlite:///:memory:") == "sqlite:///:memory:"
    assert sqlite_url("postgresql://u:p@host/db") == "postgresql://u:p@host/db"


def test_creates_parent_directories(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "ledger.db"

    db = create_sqlite_database(str(db_path))
    db.list_rules("local")
    db.disconnect()

    assert db_path.exists()


def test_environment_variable_is_used(tmp_path, monkeypatch):
    db_path = tmp_path / "from_env.db"
    monkeypatch.setenv("LEDGERLINE_DB_PATH", str(db_path))

    db = create_sqlite_database()

    assert db.database_url == f"sqlite:///{db_path}"
