"""Domain model entities for ledgerline.

These are pure data classes representing business concepts, independent of
database schema. Parsing produces NormalizedTransaction values; the database
layer maps stored rows back into Transaction, CSVImport and
ClassificationRule entities.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Optional

from ledgerline.domain.payment_methods import PaymentMethod


@dataclass(frozen=True)
class NormalizedTransaction:
    """A transaction parsed from one CSV row.

    ``amount`` is always non-negative; the sign lives in ``type``.
    """

    date: str
    description: str
    amount: Decimal
    type: str
    payment_method: PaymentMethod = PaymentMethod.OTHER
    category: Optional[str] = None
    check_number: Optional[str] = None
    reference_number: Optional[str] = None
    source_bank_name: str = ""
    original_description: str = ""
    company_id: Optional[str] = None
    source_file: Optional[str] = None
    row_index: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "description": self.description,
            "amount": str(self.amount),
            "type": self.type,
            "category": self.category,
            "paymentMethod": self.payment_method.value,
            "checkNumber": self.check_number,
            "referenceNumber": self.reference_number,
            "bankName": self.source_bank_name,
            "originalDescription": self.original_description,
            "companyId": self.company_id,
            "sourceFile": self.source_file,
        }


@dataclass(frozen=True)
class RowError:
    """A data row that could not be parsed.

    ``row_index`` is the 1-based physical line in the source file where the
    record starts; blank lines count.
    """

    row_index: int
    reason: str

    def __str__(self) -> str:
        return f"Row {self.row_index}: {self.reason}"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one uploaded CSV file."""

    success: bool
    transactions: list[NormalizedTransaction] = field(default_factory=list)
    detected_bank: Optional[str] = None
    detected_bank_name: Optional[str] = None
    headers: list[str] = field(default_factory=list)
    sample_rows: list[dict[str, str]] = field(default_factory=list)
    total_rows: int = 0
    errors: list[RowError] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def parsed_count(self) -> int:
        return len(self.transactions)

    @property
    def requires_mapping(self) -> bool:
        """Whether detection fell back to the generic profile."""
        return self.success and self.detected_bank == "generic"

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "transactions": [t.to_dict() for t in self.transactions],
            "detectedBank": self.detected_bank,
            "detectedBankName": self.detected_bank_name,
            "headers": list(self.headers),
            "sampleRows": list(self.sample_rows),
            "totalRows": self.total_rows,
            "parsedCount": self.parsed_count,
            "errors": [{"row": e.row_index, "error": e.reason} for e in self.errors] or None,
            "requiresMapping": self.requires_mapping,
        }


@dataclass(frozen=True)
class Transaction:
    """Stored ledger transaction entity."""

    id: int
    user_id: str
    date: date
    description: str
    amount: Decimal
    type: str
    payment_method: str
    imported_at: datetime
    payee: Optional[str] = None
    category: Optional[str] = None
    check_number: Optional[str] = None
    reference_number: Optional[str] = None
    company_id: Optional[str] = None
    source: Optional[str] = None
    source_file: Optional[str] = None
    bank_name: Optional[str] = None
    original_description: Optional[str] = None
    csv_import_id: Optional[int] = None


@dataclass(frozen=True)
class CSVImport:
    """Record of one committed CSV import."""

    id: int
    user_id: str
    file_name: str
    bank_format: str
    status: str
    created_at: datetime
    bank_name: Optional[str] = None
    company_id: Optional[str] = None
    transaction_count: int = 0
    duplicate_count: int = 0
    error_count: int = 0
    date_range_start: Optional[date] = None
    date_range_end: Optional[date] = None


@dataclass(frozen=True)
class ClassificationRule:
    """User-defined keyword rule assigning a category."""

    id: int
    user_id: str
    pattern: str
    category: str
    priority: int
    is_active: bool
    created_at: datetime

    @property
    def keywords(self) -> list[str]:
        """Comma-separated pattern split into trimmed, lower-cased keywords."""
        return [k.strip().lower() for k in self.pattern.split(",") if k.strip()]

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "category": self.category,
            "priority": self.priority,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class ImportSummary:
    """Counts reported back after committing an import."""

    imported: int
    duplicates: int
    total: int
    import_id: Optional[int] = None
    classified: int = 0
    rules_applied: int = 0
    inserted_ids: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "imported": self.imported,
            "duplicates": self.duplicates,
            "total": self.total,
            "importId": self.import_id,
            "classified": self.classified,
            "rulesApplied": self.rules_applied,
        }
