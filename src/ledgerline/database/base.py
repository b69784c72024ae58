"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerline.domain.entities import (
    ClassificationRule,
    CSVImport,
    NormalizedTransaction,
    Transaction,
)
from ledgerline.domain.deduplication import DedupKey


class Database(ABC):
    """Abstract database interface for ledgerline."""

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
        user_id: str,
        transaction: NormalizedTransaction,
        csv_import_id: Optional[int] = None,
    ) -> int:
        """Store a parsed transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def create_transactions(
        self,
        user_id: str,
        transactions: list[NormalizedTransaction],
        csv_import_id: Optional[int] = None,
    ) -> list[int]:
        """Store a batch of parsed transactions in one commit.

        Returns the new IDs in input order.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        company_id: Optional[str] = None,
        uncategorized: bool = False,
        csv_import_id: Optional[int] = None,
        transaction_ids: Optional[list[int]] = None,
    ) -> list[Transaction]:
        """List a user's transactions with optional filters, newest first.

        ``uncategorized`` selects rows whose category is NULL or empty.
        """
        pass

    @abstractmethod
    def list_transaction_keys(self, user_id: str) -> set[DedupKey]:
        """Return the (date, description, amount) keys of a user's transactions."""
        pass

    @abstractmethod
    def update_transactions_category(
        self, user_id: str, transaction_ids: list[int], category: str
    ) -> int:
        """Set the category on the given transactions. Returns rows updated."""
        pass

    @abstractmethod
    def delete_transactions_by_import(self, user_id: str, csv_import_id: int) -> int:
        """Delete transactions created by an import. Returns rows deleted."""
        pass

    @abstractmethod
    def unlink_transactions_from_import(self, user_id: str, csv_import_id: int) -> int:
        """Clear the import link on transactions. Returns rows updated."""
        pass

    @abstractmethod
    def count_import_transactions(self, csv_import_id: int) -> int:
        """Count transactions still linked to an import."""
        pass

    # CSV import operations
    @abstractmethod
    def create_csv_import(
        self,
        user_id: str,
        file_name: str,
        bank_format: str,
        bank_name: Optional[str] = None,
        company_id: Optional[str] = None,
        transaction_count: int = 0,
        duplicate_count: int = 0,
        error_count: int = 0,
        date_range_start: Optional[str] = None,
        date_range_end: Optional[str] = None,
    ) -> int:
        """Create an import record. Returns import ID."""
        pass

    @abstractmethod
    def get_csv_import(self, csv_import_id: int) -> Optional[CSVImport]:
        """Get import record by ID."""
        pass

    @abstractmethod
    def list_csv_imports(
        self,
        user_id: str,
        status: Optional[str] = None,
        company_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[CSVImport]:
        """List a user's import records, newest first."""
        pass

    @abstractmethod
    def update_csv_import(self, csv_import_id: int, **fields: Any) -> None:
        """Update columns of an import record."""
        pass

    @abstractmethod
    def delete_csv_import(self, csv_import_id: int) -> None:
        """Delete an import record."""
        pass

    # Classification rule operations
    @abstractmethod
    def create_rule(
        self,
        user_id: str,
        pattern: str,
        category: str,
        priority: int = 0,
        is_active: bool = True,
    ) -> int:
        """Create a classification rule. Returns rule ID."""
        pass

    @abstractmethod
    def get_rule(self, rule_id: int) -> Optional[ClassificationRule]:
        """Get rule by ID."""
        pass

    @abstractmethod
    def list_rules(self, user_id: str, active_only: bool = False) -> list[ClassificationRule]:
        """List a user's rules ordered by priority (highest first), then ID."""
        pass

    @abstractmethod
    def update_rule_active(self, rule_id: int, is_active: bool) -> None:
        """Enable or disable a rule."""
        pass

    @abstractmethod
    def delete_rule(self, rule_id: int) -> None:
        """Delete a rule."""
        pass
