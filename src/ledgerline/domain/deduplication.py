"""Duplicate filtering against transactions already in the ledger.

The natural key is (date, description, amount). It is a heuristic: two real
purchases with the same date, description and amount are indistinguishable,
and the second one is treated as a duplicate.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from ledgerline.domain.entities import NormalizedTransaction
from ledgerline.utils.amount_parser import to_cents

DedupKey = tuple[str, str, Decimal]

def dedup_key(
    txn_date: Union[str, date], description: Optional[str], amount: Union[Decimal, int, str]
) -> DedupKey:
    """Build the (date, description, amount) key used to spot duplicates.

    Dates are compared as ISO strings and amounts at cent precision, so a
    parsed Decimal("50") matches a stored Decimal("50.00").
    """
    iso_date = txn_date.isoformat() if isinstance(txn_date, date) else str(txn_date)
    return (
        iso_date,
        description or "",
        to_cents(amount),
    )

@dataclass(frozen=True)
class DedupResult:
    """Candidates split into those to import and those already present."""

    accepted: list[NormalizedTransaction] = field(default_factory=list)
    duplicates: list[NormalizedTransaction] = field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)

def filter_duplicates(
    candidates: Iterable[NormalizedTransaction],
    existing_keys: set[DedupKey],
    skip_duplicates: bool = True,
) -> DedupResult:
    """Drop candidates whose key already exists in the ledger.

    Args:
        candidates: Parsed transactions about to be imported
        existing_keys: Keys of the user's stored transactions
        skip_duplicates: When False every candidate is accepted

    Returns:
        DedupResult with accepted and duplicate transactions, in input order
    """
    candidates = list(candidates)
    if not skip_duplicates:
        return DedupResult(accepted=candidates)

    accepted = []
    duplicates = []
    for txn in candidates:
        if dedup_key(txn.date, txn.description, txn.amount) in existing_keys:
            duplicates.append(txn)
        else:
            accepted.append(txn)
    return DedupResult(accepted=accepted, duplicates=duplicates)
