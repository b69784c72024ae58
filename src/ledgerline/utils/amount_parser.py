"""Amount parsing utilities."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Optional
import logging
import re

logger = logging.getLogger(__name__)

INCOME = "income"
EXPENSE = "expense"

_CURRENCY_AND_SEPARATORS = re.compile(r"[$€£¥,\s]")
_SIGN_SUFFIX = re.compile(r"(CR|DR)$", re.IGNORECASE)
_CENTS = Decimal("0.01")


class SignMarker(Enum):
    """Sign information found in an amount string before the number is parsed."""

    UNSIGNED = "unsigned"
    PAREN_NEGATIVE = "paren_negative"
    CREDIT_SUFFIX = "credit_suffix"
    DEBIT_SUFFIX = "debit_suffix"

    def after_suffix(self, suffix: str) -> "SignMarker":
        """Return the marker after seeing a CR/DR suffix.

        Parentheses dominate: a parenthesized value stays negative whatever
        suffix follows.
        """
        if self is SignMarker.PAREN_NEGATIVE:
            return self
        if suffix.upper() == "DR":
            return SignMarker.DEBIT_SUFFIX
        return SignMarker.CREDIT_SUFFIX

    def apply(self, amount: Decimal) -> Decimal:
        """Resolve the marker against a parsed amount."""
        if self in (SignMarker.PAREN_NEGATIVE, SignMarker.DEBIT_SUFFIX):
            return -abs(amount)
        if self is SignMarker.CREDIT_SUFFIX:
            return abs(amount)
        return amount


@dataclass(frozen=True)
class AmountOutcome:
    """Result of parsing an amount.

    Either a parsed value, or a value defaulted to zero together with the
    reason. Parsing never raises; callers that want to warn about defaulted
    amounts check ``is_defaulted``.
    """

    value: Decimal
    reason: Optional[str] = None

    @property
    def is_defaulted(self) -> bool:
        return self.reason is not None

    @classmethod
    def ok(cls, value: Decimal) -> "AmountOutcome":
        return cls(value=value)

    @classmethod
    def defaulted(cls, reason: str) -> "AmountOutcome":
        return cls(value=Decimal("0"), reason=reason)


def _clean_amount(amount_str: Optional[str]) -> tuple[str, SignMarker]:
    """Strip sign markers, currency symbols and separators from an amount string."""
    cleaned = (amount_str or "").strip()
    marker = SignMarker.UNSIGNED

    if cleaned.startswith("(") and cleaned.endswith(")"):
        marker = SignMarker.PAREN_NEGATIVE
        cleaned = cleaned[1:-1]

    cleaned = _CURRENCY_AND_SEPARATORS.sub("", cleaned)

    suffix = _SIGN_SUFFIX.search(cleaned)
    if suffix:
        marker = marker.after_suffix(suffix.group(1))
        cleaned = cleaned[: suffix.start()]

    return cleaned, marker


def _to_decimal(cleaned: str) -> AmountOutcome:
    if not cleaned:
        return AmountOutcome.defaulted("empty amount")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return AmountOutcome.defaulted(f"non-numeric amount '{cleaned}'")
    if not value.is_finite():
        return AmountOutcome.defaulted(f"non-finite amount '{cleaned}'")
    return AmountOutcome.ok(value)


def parse_amount(amount_str: Optional[str]) -> AmountOutcome:
    """Parse a signed amount string into a Decimal.

    Handles various formats:
    - "123.45", "-123.45", "$1,234.56", "-$123.45"
    - "(123.45)" (negative in parentheses)
    - "100.00CR" (credit, positive) and "50.00DR" (debit, negative)

    Args:
        amount_str: Amount string, may be None or empty

    Returns:
        AmountOutcome; unparseable input yields a defaulted zero
    """
    cleaned, marker = _clean_amount(amount_str)
    outcome = _to_decimal(cleaned)
    if outcome.is_defaulted:
        logger.debug("Amount %r defaulted to 0: %s", amount_str, outcome.reason)
        return outcome
    return AmountOutcome.ok(marker.apply(outcome.value))


def parse_split_amount(debit_str: Optional[str], credit_str: Optional[str]) -> AmountOutcome:
    """Combine separate debit and credit columns into one signed amount.

    Each column is cleaned independently; sign markers are ignored and the
    result is ``credit - |debit|``.
    """
    debit = _to_decimal(_clean_amount(debit_str)[0])
    credit = _to_decimal(_clean_amount(credit_str)[0])
    amount = credit.value - abs(debit.value)

    if debit.is_defaulted and credit.is_defaulted:
        logger.debug(
            "Split amount (%r, %r) defaulted to 0", debit_str, credit_str
        )
        return AmountOutcome.defaulted("missing both debit and credit values")
    return AmountOutcome.ok(amount)


def transaction_type(amount: Decimal) -> str:
    """Derive the transaction type from a signed amount."""
    return INCOME if amount >= 0 else EXPENSE


def to_cents(amount) -> Decimal:
    """Round an amount to cents, half away from zero."""
    return Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
