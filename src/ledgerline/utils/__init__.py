"""Utility functions for ledgerline."""

from ledgerline.utils.date_parser import normalize_date
from ledgerline.utils.amount_parser import parse_amount, parse_split_amount
from ledgerline.utils.field_extractor import extract_field

__all__ = ["normalize_date", "parse_amount", "parse_split_amount", "extract_field"]
