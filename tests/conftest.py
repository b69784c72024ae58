"""Shared pytest fixtures for ledgerline tests."""

import tempfile
import os
from pathlib import Path
import pytest

from ledgerline.database.factories import create_sqlite_database
from ledgerline.domain.classification import ClassificationService
from ledgerline.domain.csv_import import CSVImportService
from ledgerline.domain.rules import RuleService
from ledgerline.domain.transaction import TransactionService

# Matches the CLI default for --user
USER_ID = "local"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    return USER_ID


@pytest.fixture
def csv_import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def rule_service(temp_db):
    """Create a RuleService with a temporary database."""
    return RuleService(temp_db)


@pytest.fixture
def classification_service(temp_db):
    """Create a ClassificationService with a temporary database."""
    return ClassificationService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def ride_rules(rule_service, user_id):
    """A broad high-priority rule and a narrower low-priority one."""
    travel_id = rule_service.create_rule(user_id, pattern="uber, lyft", category="Travel", priority=10)
    meals_id = rule_service.create_rule(user_id, pattern="uber eats", category="Meals", priority=5)
    return {"Travel": travel_id, "Meals": meals_id}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
