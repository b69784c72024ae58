"""Date parsing utilities."""

from datetime import datetime
from typing import Iterable, Optional
import re

from dateutil import parser as date_parser

DEFAULT_DATE_FORMATS = ("MM/dd/yyyy", "yyyy-MM-dd", "M/d/yyyy")

_PATTERN_TOKENS = re.compile(r"yyyy|yy|MM|M|dd|d")
_STRPTIME_DIRECTIVES = {
    "yyyy": "%Y",
    "yy": "%y",
    "MM": "%m",
    "M": "%m",
    "dd": "%d",
    "d": "%d",
}


def to_strptime(pattern: str) -> str:
    """Convert a pattern such as "MM/dd/yyyy" into a strptime format.

    strptime accepts non-padded months and days for %m and %d, so "M/d/yyyy"
    and "MM/dd/yyyy" produce the same directive string.
    """
    return _PATTERN_TOKENS.sub(lambda m: _STRPTIME_DIRECTIVES[m.group(0)], pattern)


def normalize_date(date_str: Optional[str], formats: Iterable[str] = DEFAULT_DATE_FORMATS) -> Optional[str]:
    """Parse a date string into an ISO "YYYY-MM-DD" string.

    Candidate formats are tried in order and the first one producing a valid
    calendar date wins. If none matches, a best-effort parse with dateutil is
    attempted.

    Args:
        date_str: Raw date string from a bank export
        formats: Ordered candidate patterns ("MM/dd/yyyy", "yyyy-MM-dd", ...)

    Returns:
        ISO date string, or None if the value cannot be parsed
    """
    if not date_str or not date_str.strip():
        return None

    date_str = date_str.strip()

    for pattern in formats:
        try:
            return datetime.strptime(date_str, to_strptime(pattern)).date().isoformat()
        except ValueError:
            continue

    try:
        return date_parser.parse(date_str).date().isoformat()
    except (ValueError, OverflowError):
        return None
