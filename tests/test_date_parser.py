"""Tests for bank export date normalization."""

import pytest

from ledgerline.utils.date_parser import DEFAULT_DATE_FORMATS, normalize_date, to_strptime


def test_us_date():
    assert normalize_date("03/15/2024") == "2024-03-15"


def test_iso_date():
    assert normalize_date("2024-03-15") == "2024-03-15"


def test_unpadded_date():
    assert normalize_date("3/5/2024") == "2024-03-05"


def test_whitespace_is_trimmed():
    assert normalize_date("  03/15/2024 ") == "2024-03-15"


@pytest.mark.parametrize("value", [None, "", "   ", "not-a-date", "02/30/2024"])
def test_invalid_dates(value):
    assert normalize_date(value) is None


def test_format_order_decides_ambiguous_dates():
    assert normalize_date("01/02/2024", ("dd/MM/yyyy",)) == "2024-02-01"
    assert normalize_date("01/02/2024", ("MM/dd/yyyy",)) == "2024-01-02"


def test_two_digit_year():
    assert normalize_date("01/15/24", ("MM/dd/yy",)) == "2024-01-15"


def test_falls_back_to_free_form_parsing():
    """Dates outside the candidate formats are still parsed when unambiguous."""
    assert normalize_date("Jan 15, 2024") == "2024-01-15"


def test_to_strptime():
    assert to_strptime("MM/dd/yyyy") == "%m/%d/%Y"
    assert to_strptime("yyyy-MM-dd") == "%Y-%m-%d"
    assert to_strptime("M/d/yy") == "%m/%d/%y"


def test_default_formats():
    assert DEFAULT_DATE_FORMATS == ("MM/dd/yyyy", "yyyy-MM-dd", "M/d/yyyy")
