"""Tests for duplicate filtering."""

from datetime import date
from decimal import Decimal

from ledgerline.domain.deduplication import dedup_key, filter_duplicates
from ledgerline.domain.entities import NormalizedTransaction


def make_txn(description="Coffee", amount="3.50", txn_date="2024-01-05", type="expense"):
    return NormalizedTransaction(
        date=txn_date, description=description, amount=Decimal(amount), type=type
    )


def test_dedup_key_normalizes_inputs():
    assert dedup_key(date(2024, 1, 5), "Coffee", Decimal("3.5")) == dedup_key(
        "2024-01-05", "Coffee", "3.50"
    )


def test_dedup_key_rounds_to_cents():
    assert dedup_key("2024-01-05", "X", Decimal("1.005"))[2] == Decimal("1.01")


def test_dedup_key_missing_description():
    assert dedup_key("2024-01-05", None, 1) == ("2024-01-05", "", Decimal("1.00"))


def test_existing_transactions_are_filtered():
    existing = {dedup_key("2024-01-05", "Coffee", "3.50")}
    new = make_txn(description="Tea")

    result = filter_duplicates([make_txn(), new], existing)

    assert result.accepted == [new]
    assert result.duplicate_count == 1


def test_description_is_case_sensitive():
    existing = {dedup_key("2024-01-05", "COFFEE", "3.50")}
    result = filter_duplicates([make_txn()], existing)
    assert result.duplicate_count == 0


def test_same_amount_income_and_expense_collide():
    """Only the unsigned amount is part of the key."""
    existing = {dedup_key("2024-01-05", "Coffee", "3.50")}
    result = filter_duplicates([make_txn(type="income")], existing)
    assert result.duplicate_count == 1


def test_repeats_within_a_batch_are_kept():
    result = filter_duplicates([make_txn(), make_txn()], set())
    assert len(result.accepted) == 2


def test_skip_disabled_accepts_everything():
    existing = {dedup_key("2024-01-05", "Coffee", "3.50")}
    result = filter_duplicates([make_txn()], existing, skip_duplicates=False)

    assert len(result.accepted) == 1
    assert result.duplicate_count == 0
