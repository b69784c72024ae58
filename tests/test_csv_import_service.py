"""Domain tests for CSV import service."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerline.domain.csv_parser import parse_csv_file
from ledgerline.domain.entities import NormalizedTransaction
from ledgerline.domain.errors import NotFoundError


def test_import_summary(csv_import_service, user_id, fixtures_dir):
    parsed, summary = csv_import_service.import_csv(fixtures_dir / "chase_checking.csv", user_id)

    assert parsed.success
    assert summary.imported == 5
    assert summary.duplicates == 0
    assert summary.total == 5
    assert summary.import_id is not None
    assert len(summary.inserted_ids) == 5


def test_import_twice_skips_everything(csv_import_service, user_id, fixtures_dir):
    csv_file = fixtures_dir / "chase_checking.csv"
    csv_import_service.import_csv(csv_file, user_id)

    _, summary = csv_import_service.import_csv(csv_file, user_id)

    assert summary.imported == 0
    assert summary.duplicates == summary.total == 5


def test_allow_duplicates(csv_import_service, temp_db, user_id, fixtures_dir):
    csv_file = fixtures_dir / "chase_checking.csv"
    csv_import_service.import_csv(csv_file, user_id)

    _, summary = csv_import_service.import_csv(csv_file, user_id, skip_duplicates=False)

    assert summary.imported == 5
    assert summary.duplicates == 0
    assert len(temp_db.list_transactions(user_id)) == 10


def test_duplicates_are_per_user(csv_import_service, user_id, fixtures_dir):
    csv_file = fixtures_dir / "chase_checking.csv"
    csv_import_service.import_csv(csv_file, user_id)

    _, summary = csv_import_service.import_csv(csv_file, "someone-else")

    assert summary.imported == 5


def test_import_classifies_new_transactions(csv_import_service, temp_db, user_id, ride_rules, fixtures_dir):
    _, summary = csv_import_service.import_csv(fixtures_dir / "chase_checking.csv", user_id)

    assert summary.classified == 2
    assert summary.rules_applied == 2
    categorized = [t for t in temp_db.list_transactions(user_id) if t.category]
    assert {t.category for t in categorized} == {"Travel"}


def test_stored_transaction_fields(csv_import_service, temp_db, user_id, fixtures_dir):
    _, summary = csv_import_service.import_csv(fixtures_dir / "chase_checking.csv", user_id, company_id="acme")

    txns = {t.description: t for t in temp_db.list_transactions(user_id)}
    payroll = txns["PAYROLL ACME CORP"]
    assert payroll.date == date(2024, 1, 16)
    assert payroll.amount == Decimal("2500.00")
    assert payroll.type == "income"
    assert payroll.payment_method == "bank_transfer"
    assert payroll.bank_name == "Chase Bank"
    assert payroll.source == "csv"
    assert payroll.source_file == "chase_checking.csv"
    assert payroll.company_id == "acme"
    assert payroll.csv_import_id == summary.import_id
    assert txns["CHECK 1042"].check_number == "1042"


def test_import_record(csv_import_service, user_id, fixtures_dir):
    _, summary = csv_import_service.import_csv(fixtures_dir / "bank_of_america.csv", user_id)

    record = csv_import_service.get_import(user_id, summary.import_id)
    assert record.file_name == "bank_of_america.csv"
    assert record.bank_format == "bankOfAmerica"
    assert record.bank_name == "Bank of America"
    assert record.status == "completed"
    assert record.transaction_count == 2
    assert record.duplicate_count == 0
    assert record.error_count == 1
    assert record.date_range_start == date(2024, 1, 5)
    assert record.date_range_end == date(2024, 1, 7)


def test_unparseable_file_returns_no_summary(csv_import_service, user_id, tmp_path):
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text("Date,Description,Amount\n", encoding="utf-8")

    parsed, summary = csv_import_service.import_csv(csv_path, user_id)

    assert not parsed.success
    assert summary is None
    assert csv_import_service.list_imports(user_id) == []


def test_confirm_import_from_preview(csv_import_service, user_id, fixtures_dir):
    """A previewed parse result can be committed later."""
    parsed = parse_csv_file(fixtures_dir / "capital_one.csv")

    summary = csv_import_service.confirm_import(
        user_id,
        parsed.transactions,
        file_name="capital_one.csv",
        bank_format=parsed.detected_bank,
        bank_name=parsed.detected_bank_name,
    )

    assert summary.to_dict() == {
        "imported": 3,
        "duplicates": 0,
        "total": 3,
        "importId": summary.import_id,
        "classified": 0,
        "rulesApplied": 0,
    }


def test_confirm_empty_batch(csv_import_service, user_id):
    summary = csv_import_service.confirm_import(user_id, [])

    assert summary.imported == 0
    assert summary.total == 0


def test_import_record_failure_still_imports(csv_import_service, temp_db, user_id, monkeypatch):
    def fail(**kwargs):
        raise RuntimeError("imports table unavailable")

    monkeypatch.setattr(temp_db, "create_csv_import", fail)
    txn = NormalizedTransaction(
        date="2024-01-05", description="Coffee", amount=Decimal("3.50"), type="expense"
    )

    summary = csv_import_service.confirm_import(user_id, [txn])

    assert summary.imported == 1
    assert summary.import_id is None
    assert temp_db.list_transactions(user_id)[0].csv_import_id is None


def test_reimport_with_sub_cent_amounts_is_all_duplicates(csv_import_service, temp_db, user_id, tmp_path):
    csv_file = tmp_path / "sub_cent.csv"
    csv_file.write_text("Date,Description,Amount\n01/05/2024,Parking,-4.505\n01/06/2024,Toll,-2.125\n")

    _, first = csv_import_service.import_csv(csv_file, user_id)
    _, second = csv_import_service.import_csv(csv_file, user_id)

    assert first.imported == 2
    assert second.imported == 0
    assert second.duplicates == second.total == 2
    stored = {t.description: t.amount for t in temp_db.list_transactions(user_id)}
    assert stored == {"Parking": Decimal("4.51"), "Toll": Decimal("2.13")}


class TestImportHistory:
    """Tests for listing and deleting imports."""

    @pytest.fixture
    def imported(self, csv_import_service, user_id, fixtures_dir):
        _, summary = csv_import_service.import_csv(fixtures_dir / "chase_checking.csv", user_id)
        return summary

    def test_list_imports(self, csv_import_service, user_id, imported, fixtures_dir):
        _, second = csv_import_service.import_csv(fixtures_dir / "capital_one.csv", user_id)

        records = csv_import_service.list_imports(user_id)

        assert [r.id for r in records] == [second.import_id, imported.import_id]
        assert csv_import_service.list_imports("someone-else") == []
        assert len(csv_import_service.list_imports(user_id, limit=1)) == 1

    def test_list_import_transactions(self, csv_import_service, user_id, imported):
        txns = csv_import_service.list_import_transactions(user_id, imported.import_id)
        assert len(txns) == 5
        assert csv_import_service.linked_transaction_count(imported.import_id) == 5

    def test_delete_keeps_transactions_by_default(self, csv_import_service, temp_db, user_id, imported):
        result = csv_import_service.delete_import(user_id, imported.import_id)

        assert result["deleted_transaction_count"] == 0
        assert result["import_deleted"] is False
        assert len(temp_db.list_transactions(user_id)) == 5
        assert csv_import_service.linked_transaction_count(imported.import_id) == 0
        assert csv_import_service.get_import(user_id, imported.import_id).status == "deleted"
        assert csv_import_service.list_imports(user_id) == []
        assert len(csv_import_service.list_imports(user_id, status="all")) == 1

    def test_delete_with_transactions(self, csv_import_service, temp_db, user_id, imported):
        result = csv_import_service.delete_import(
            user_id, imported.import_id, delete_transactions=True, purge=True
        )

        assert result["deleted_transaction_count"] == 5
        assert result["import_deleted"] is True
        assert temp_db.list_transactions(user_id) == []
        assert csv_import_service.get_import(user_id, imported.import_id) is None

    def test_reimport_after_deleting_transactions(self, csv_import_service, user_id, imported, fixtures_dir):
        csv_import_service.delete_import(user_id, imported.import_id, delete_transactions=True)

        _, summary = csv_import_service.import_csv(fixtures_dir / "chase_checking.csv", user_id)

        assert summary.imported == 5

    def test_other_users_cannot_delete(self, csv_import_service, imported):
        with pytest.raises(NotFoundError):
            csv_import_service.delete_import("someone-else", imported.import_id)
        with pytest.raises(NotFoundError):
            csv_import_service.list_import_transactions("someone-else", imported.import_id)
