"""CSV import domain service."""

from dataclasses import replace
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ledgerline.database.base import Database
from ledgerline.domain.bank_formats import AUTO
from ledgerline.domain.classification import ClassificationResult, ClassificationService
from ledgerline.domain.csv_parser import parse_csv_file
from ledgerline.domain.deduplication import filter_duplicates
from ledgerline.domain.entities import (
    CSVImport,
    ImportSummary,
    NormalizedTransaction,
    ParseResult,
    Transaction,
)
from ledgerline.domain.errors import NotFoundError, import_not_found

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_DELETED = "deleted"
MAX_LIST_LIMIT = 100


class CSVImportService:
    """Service for committing parsed CSV transactions and tracking imports."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.classification_service = ClassificationService(db)

    def confirm_import(
        self,
        user_id: str,
        transactions: list[NormalizedTransaction],
        skip_duplicates: bool = True,
        company_id: Optional[str] = None,
        file_name: str = "import.csv",
        bank_format: str = AUTO,
        bank_name: Optional[str] = None,
        error_count: int = 0,
    ) -> ImportSummary:
        """Store parsed transactions and classify the new ones.

        The steps run one after another and are not atomic: duplicates are
        filtered, an import record is created, the batch is inserted and
        finally classification rules are applied to the inserted rows. If the
        process stops before classification the rows stay uncategorized, and
        ``ClassificationService.apply_rules`` can be run again later.

        Args:
            user_id: Ledger owner
            transactions: Output of the parser
            skip_duplicates: Drop rows whose (date, description, amount)
                already exists for this user
            company_id: Company scope; overrides the one set while parsing
            file_name: Source file name for the import record
            bank_format: Format ID the file was parsed with
            bank_name: Display name of the detected bank
            error_count: Row errors reported by the parser

        Returns:
            ImportSummary with imported, duplicate and classification counts
        """
        existing_keys = self.db.list_transaction_keys(user_id) if skip_duplicates else set()
        dedup = filter_duplicates(transactions, existing_keys, skip_duplicates=skip_duplicates)

        to_insert = dedup.accepted
        if company_id:
            to_insert = [replace(t, company_id=company_id) for t in to_insert]

        import_id = self._create_import_record(
            user_id=user_id,
            file_name=file_name,
            bank_format=bank_format,
            bank_name=bank_name,
            company_id=company_id,
            transactions=to_insert,
            duplicate_count=dedup.duplicate_count,
            error_count=error_count,
        )

        inserted_ids = []
        if to_insert:
            inserted_ids = self.db.create_transactions(user_id, to_insert, csv_import_id=import_id)

        classification = ClassificationResult(classified=0, rules=0)
        if inserted_ids:
            classification = self.classification_service.apply_rules(user_id, inserted_ids)

        logger.info(
            "Imported %d of %d transactions from %s (%d duplicates, %d classified)",
            len(inserted_ids),
            len(transactions),
            file_name,
            dedup.duplicate_count,
            classification.classified,
        )

        return ImportSummary(
            imported=len(inserted_ids),
            duplicates=dedup.duplicate_count,
            total=len(transactions),
            import_id=import_id,
            classified=classification.classified,
            rules_applied=classification.rules,
            inserted_ids=inserted_ids,
        )

    def _create_import_record(
        self,
        user_id: str,
        file_name: str,
        bank_format: str,
        bank_name: Optional[str],
        company_id: Optional[str],
        transactions: list[NormalizedTransaction],
        duplicate_count: int,
        error_count: int,
    ) -> Optional[int]:
        """Create the import record; on failure the batch is stored without one."""
        dates = [t.date for t in transactions]
        try:
            return self.db.create_csv_import(
                user_id=user_id,
                file_name=file_name,
                bank_format=bank_format,
                bank_name=bank_name,
                company_id=company_id,
                transaction_count=len(transactions),
                duplicate_count=duplicate_count,
                error_count=error_count,
                date_range_start=min(dates) if dates else None,
                date_range_end=max(dates) if dates else None,
            )
        except Exception:
            logger.warning(
                "Could not create CSV import record for %s; importing without it",
                file_name,
                exc_info=True,
            )
            return None

    def import_csv(
        self,
        csv_file_path: Union[str, Path],
        user_id: str,
        bank_format: str = AUTO,
        company_id: Optional[str] = None,
        skip_duplicates: bool = True,
        custom_mapping: Optional[Mapping[str, Any]] = None,
        date_format: Optional[str] = None,
    ) -> tuple[ParseResult, Optional[ImportSummary]]:
        """Parse a CSV file and commit its transactions.

        Returns:
            Tuple of (parse result, import summary); the summary is None when
            the file could not be parsed
        """
        parsed = parse_csv_file(
            csv_file_path,
            bank_format=bank_format,
            company_id=company_id,
            custom_mapping=custom_mapping,
            date_format=date_format,
        )
        if not parsed.success:
            return parsed, None

        summary = self.confirm_import(
            user_id=user_id,
            transactions=parsed.transactions,
            skip_duplicates=skip_duplicates,
            company_id=company_id,
            file_name=Path(csv_file_path).name,
            bank_format=parsed.detected_bank or bank_format,
            bank_name=parsed.detected_bank_name,
            error_count=len(parsed.errors),
        )
        return parsed, summary

    def get_import(self, user_id: str, import_id: int) -> Optional[CSVImport]:
        """Get an import record owned by the user, or None."""
        record = self.db.get_csv_import(import_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    def list_imports(
        self,
        user_id: str,
        status: Optional[str] = STATUS_COMPLETED,
        company_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[CSVImport]:
        """List the user's imports, newest first.

        Args:
            user_id: Ledger owner
            status: Status filter; None or "all" lists every status
            company_id: Optional company filter
            limit: Page size, clamped to 1..100
            offset: Page offset, clamped to >= 0
        """
        if status == "all":
            status = None
        return self.db.list_csv_imports(
            user_id=user_id,
            status=status,
            company_id=company_id,
            limit=min(max(limit, 1), MAX_LIST_LIMIT),
            offset=max(offset, 0),
        )

    def linked_transaction_count(self, import_id: int) -> int:
        """Number of transactions still linked to an import."""
        return self.db.count_import_transactions(import_id)

    def list_import_transactions(self, user_id: str, import_id: int) -> list[Transaction]:
        """List transactions created by an import.

        Raises:
            NotFoundError: If the import doesn't exist for this user
        """
        if self.get_import(user_id, import_id) is None:
            raise NotFoundError(import_not_found(import_id))
        return self.db.list_transactions(user_id=user_id, csv_import_id=import_id)

    def delete_import(
        self,
        user_id: str,
        import_id: int,
        delete_transactions: bool = False,
        purge: bool = False,
    ) -> dict[str, Any]:
        """Delete an import.

        Linked transactions are either deleted or unlinked (kept, with no
        import ID). The import record is either removed (``purge``) or
        marked as deleted.

        Raises:
            NotFoundError: If the import doesn't exist for this user
        """
        if self.get_import(user_id, import_id) is None:
            raise NotFoundError(import_not_found(import_id))

        deleted_transactions = 0
        if delete_transactions:
            deleted_transactions = self.db.delete_transactions_by_import(user_id, import_id)
        else:
            self.db.unlink_transactions_from_import(user_id, import_id)

        if purge:
            self.db.delete_csv_import(import_id)
        else:
            self.db.update_csv_import(import_id, status=STATUS_DELETED)

        logger.info(
            "Deleted CSV import %d (transactions deleted: %d, record removed: %s)",
            import_id,
            deleted_transactions,
            purge,
        )
        return {
            "import_id": import_id,
            "deleted_transaction_count": deleted_transactions,
            "import_deleted": purge,
            "transactions_deleted": delete_transactions,
        }
