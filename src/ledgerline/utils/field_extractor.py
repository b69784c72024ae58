"""Column lookup for raw CSV rows."""

from typing import Mapping, Optional, Sequence


def extract_field(row: Mapping[str, Optional[str]], aliases: Optional[Sequence[str]]) -> Optional[str]:
    """Return the first non-empty value among the alias columns of a row.

    Args:
        row: Raw CSV row keyed by header name
        aliases: Candidate column names, in priority order

    Returns:
        Column value, or None if no alias is present with a value
    """
    for name in aliases or ():
        value = row.get(name)
        if value is not None and value != "":
            return value
    return None
