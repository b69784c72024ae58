"""CSV parsing pipeline: bank export text -> normalized transactions.

Nothing here touches the database. Problems with individual rows are
collected as RowError values; problems with the file as a whole come back as
a failed ParseResult rather than an exception.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ledgerline.domain.bank_formats import (
    AUTO,
    CUSTOM_FORMAT_ID,
    SPLIT_DEBIT_CREDIT,
    BankFormatProfile,
    build_custom_profile,
    resolve_profile,
)
from ledgerline.domain.entities import NormalizedTransaction, ParseResult, RowError
from ledgerline.domain.errors import ValidationError
from ledgerline.domain.payment_methods import classify_payment_method, is_deposit_slip
from ledgerline.utils.amount_parser import (
    parse_amount,
    parse_split_amount,
    to_cents,
    transaction_type,
)
from ledgerline.utils.date_parser import normalize_date
from ledgerline.utils.field_extractor import extract_field

logger = logging.getLogger(__name__)

SAMPLE_ROW_COUNT = 5
_SNIFF_BYTES = 4096
_DELIMITERS = ",;\t|"


def _sniff_delimiter(text: str) -> str:
    try:
        return csv.Sniffer().sniff(text[:_SNIFF_BYTES], delimiters=_DELIMITERS).delimiter
    except csv.Error:
        return ","


def read_numbered_rows(text: str) -> tuple[list[str], list[tuple[int, dict[str, str]]]]:
    """Tokenize CSV text into headers and (line number, row dict) pairs.

    Line numbers are 1-based physical lines of ``text`` where each record
    starts, so they stay correct across blank lines and quoted line breaks.
    Blank lines are skipped. Short rows are padded with empty values and
    extra trailing cells are ignored.

    Raises:
        csv.Error: If the text cannot be tokenized
    """
    text = text.lstrip("\ufeff")
    reader = csv.reader(io.StringIO(text), delimiter=_sniff_delimiter(text))
    records = []
    start = 1
    for line in reader:
        if any(cell.strip() for cell in line):
            records.append((start, line))
        start = reader.line_num + 1
    if not records:
        return [], []

    headers = [h.strip() for h in records[0][1]]
    rows = []
    for line_number, line in records[1:]:
        values = [cell.strip() for cell in line]
        values += [""] * (len(headers) - len(values))
        rows.append((line_number, dict(zip(headers, values))))
    return headers, rows


def read_rows(text: str) -> tuple[list[str], list[dict[str, str]]]:
    """Tokenize CSV text into headers and trimmed row dicts."""
    headers, numbered = read_numbered_rows(text)
    return headers, [row for _, row in numbered]


def normalize_row(
    row: Mapping[str, str],
    profile: BankFormatProfile,
    row_index: Optional[int] = None,
    company_id: Optional[str] = None,
    file_name: Optional[str] = None,
) -> NormalizedTransaction:
    """Turn one raw row into a NormalizedTransaction.

    Raises:
        ValidationError: If the row has no parseable date
    """
    date_value = extract_field(row, profile.aliases("date"))
    iso_date = normalize_date(date_value, profile.date_formats)
    if iso_date is None:
        raise ValidationError(f"Invalid or missing date '{date_value or ''}'")

    description = (extract_field(row, profile.aliases("description")) or "").strip()

    if profile.amount_convention == SPLIT_DEBIT_CREDIT:
        outcome = parse_split_amount(
            extract_field(row, profile.aliases("debit")),
            extract_field(row, profile.aliases("credit")),
        )
    else:
        outcome = parse_amount(extract_field(row, profile.aliases("amount")))
    # Stored amounts have cent precision; round here so dedup keys agree.
    signed_amount = to_cents(outcome.value)

    bank_type = extract_field(row, profile.aliases("type"))
    check_number = extract_field(row, profile.aliases("check_number"))
    if is_deposit_slip(bank_type):
        check_number = None

    return NormalizedTransaction(
        date=iso_date,
        description=description,
        amount=abs(signed_amount),
        type=transaction_type(signed_amount),
        payment_method=classify_payment_method(bank_type),
        category=extract_field(row, profile.aliases("category")),
        check_number=check_number,
        reference_number=extract_field(row, profile.aliases("reference_number")),
        source_bank_name=profile.display_name,
        original_description=description,
        company_id=company_id,
        source_file=file_name,
        row_index=row_index,
    )


def _parse_row(row, profile, row_index, company_id, file_name) -> Union[NormalizedTransaction, RowError]:
    try:
        return normalize_row(row, profile, row_index, company_id, file_name)
    except Exception as e:
        return RowError(row_index=row_index, reason=str(e))


def _select_profile(
    bank_format: str,
    headers: list[str],
    custom_mapping: Optional[Mapping[str, Any]],
    date_format: Optional[str],
) -> BankFormatProfile:
    if bank_format == CUSTOM_FORMAT_ID:
        if not custom_mapping:
            raise ValidationError("Custom bank format requires a column mapping")
        return build_custom_profile(custom_mapping, date_format=date_format)
    return resolve_profile(bank_format, headers)


def parse_csv_text(
    text: str,
    bank_format: str = AUTO,
    company_id: Optional[str] = None,
    custom_mapping: Optional[Mapping[str, Any]] = None,
    date_format: Optional[str] = None,
    file_name: Optional[str] = None,
) -> ParseResult:
    """Parse bank export text into normalized transactions.

    Args:
        text: CSV text including the header row
        bank_format: "auto" to detect, a registered profile ID, or "custom"
        company_id: Company scope copied onto every transaction
        custom_mapping: Logical field -> column name(s), for "custom"
        date_format: Date pattern for "custom" (defaults otherwise)
        file_name: Source file name copied onto every transaction

    Returns:
        ParseResult; ``success`` is False only for file-level problems
    """
    try:
        headers, numbered = read_numbered_rows(text)
    except csv.Error as e:
        return ParseResult.failure(f"Failed to parse CSV: {e}")

    rows = [row for _, row in numbered]
    if not rows:
        return ParseResult.failure("CSV file is empty or has no data rows")

    try:
        profile = _select_profile(bank_format, headers, custom_mapping, date_format)
    except ValidationError as e:
        return ParseResult.failure(str(e))

    outcomes = [
        _parse_row(row, profile, index, company_id, file_name)
        for index, row in numbered
    ]
    transactions = [o for o in outcomes if isinstance(o, NormalizedTransaction)]
    errors = [o for o in outcomes if isinstance(o, RowError)]

    logger.info(
        "Parsed %d/%d rows as %s (%d errors)",
        len(transactions),
        len(rows),
        profile.id,
        len(errors),
    )

    return ParseResult(
        success=True,
        transactions=transactions,
        detected_bank=profile.id,
        detected_bank_name=profile.display_name,
        headers=headers,
        sample_rows=rows[:SAMPLE_ROW_COUNT],
        total_rows=len(rows),
        errors=errors,
    )


def parse_csv_file(
    csv_file_path: Union[str, Path],
    bank_format: str = AUTO,
    company_id: Optional[str] = None,
    custom_mapping: Optional[Mapping[str, Any]] = None,
    date_format: Optional[str] = None,
) -> ParseResult:
    """Read a CSV file from disk and parse it with ``parse_csv_text``."""
    csv_path = Path(csv_file_path)
    try:
        text = csv_path.read_bytes().decode("utf-8-sig")
    except FileNotFoundError:
        return ParseResult.failure(f"CSV file not found: {csv_file_path}")
    except (OSError, UnicodeDecodeError) as e:
        return ParseResult.failure(f"Failed to read CSV: {e}")

    return parse_csv_text(
        text,
        bank_format=bank_format,
        company_id=company_id,
        custom_mapping=custom_mapping,
        date_format=date_format,
        file_name=csv_path.name,
    )
