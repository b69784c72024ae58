"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the stored schema can change
without touching the parsing and classification code.
"""

from datetime import date

from ledgerline.domain import entities as domain
from ledgerline.utils.amount_parser import to_cents
from ledgerline.database.models import (
    CSVImport as ORMCSVImport,
    ClassificationRule as ORMClassificationRule,
    Transaction as ORMTransaction,
)

CSV_SOURCE = "csv"


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        type=orm_transaction.type,
        payment_method=orm_transaction.payment_method,
        imported_at=orm_transaction.imported_at,
        payee=orm_transaction.payee,
        category=orm_transaction.category,
        check_number=orm_transaction.check_number,
        reference_number=orm_transaction.reference_number,
        company_id=orm_transaction.company_id,
        source=orm_transaction.source,
        source_file=orm_transaction.source_file,
        bank_name=orm_transaction.bank_name,
        original_description=orm_transaction.original_description,
        csv_import_id=orm_transaction.csv_import_id,
    )


def normalized_to_orm(
    user_id: str,
    txn: domain.NormalizedTransaction,
    csv_import_id: int | None = None,
) -> ORMTransaction:
    """Build a SQLAlchemy Transaction row from a parsed transaction."""
    return ORMTransaction(
        user_id=user_id,
        date=date.fromisoformat(txn.date),
        description=txn.description,
        amount=to_cents(txn.amount),
        type=txn.type,
        category=txn.category or None,
        payment_method=txn.payment_method.value,
        check_number=txn.check_number or None,
        reference_number=txn.reference_number or None,
        company_id=txn.company_id or None,
        source=CSV_SOURCE,
        source_file=txn.source_file,
        bank_name=txn.source_bank_name or None,
        original_description=txn.original_description or txn.description,
        csv_import_id=csv_import_id,
    )


def csv_import_to_domain(orm_import: ORMCSVImport) -> domain.CSVImport:
    """Convert SQLAlchemy CSVImport model to domain CSVImport entity."""
    return domain.CSVImport(
        id=orm_import.id,
        user_id=orm_import.user_id,
        file_name=orm_import.file_name,
        bank_format=orm_import.bank_format,
        status=orm_import.status,
        created_at=orm_import.created_at,
        bank_name=orm_import.bank_name,
        company_id=orm_import.company_id,
        transaction_count=orm_import.transaction_count,
        duplicate_count=orm_import.duplicate_count,
        error_count=orm_import.error_count,
        date_range_start=orm_import.date_range_start,
        date_range_end=orm_import.date_range_end,
    )


def rule_to_domain(orm_rule: ORMClassificationRule) -> domain.ClassificationRule:
    """Convert SQLAlchemy ClassificationRule model to domain entity."""
    return domain.ClassificationRule(
        id=orm_rule.id,
        user_id=orm_rule.user_id,
        pattern=orm_rule.pattern,
        category=orm_rule.category,
        priority=orm_rule.priority,
        is_active=orm_rule.is_active,
        created_at=orm_rule.created_at,
    )
