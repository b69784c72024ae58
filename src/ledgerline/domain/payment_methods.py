"""Mapping of bank transaction-type codes to payment methods."""

from enum import Enum
from typing import Optional


class PaymentMethod(str, Enum):
    """Canonical payment methods stored on ledger transactions."""

    CHECK = "check"
    BANK_TRANSFER = "bank_transfer"
    DEBIT_CARD = "debit_card"
    CREDIT_CARD = "credit_card"
    CASH = "cash"
    ZELLE = "zelle"
    PAYPAL = "paypal"
    VENMO = "venmo"
    OTHER = "other"


_DEPOSIT_MARKERS = ("CHECK_DEPOSIT", "DEPOSIT", "DSLIP")

# Evaluated top to bottom, first hit wins. Deposits must come before CHECK:
# a deposited check is a transfer into the account, not a check we wrote.
_METHOD_CHAIN: tuple[tuple[tuple[str, ...], PaymentMethod], ...] = (
    (_DEPOSIT_MARKERS, PaymentMethod.BANK_TRANSFER),
    (("CHECK", "CHK"), PaymentMethod.CHECK),
    (("DEBIT", "POS", "POINT_OF_SALE"), PaymentMethod.DEBIT_CARD),
    (("CREDIT_CARD", "VISA", "MASTERCARD"), PaymentMethod.CREDIT_CARD),
    (("ACH", "TRANSFER", "WIRE", "EFT"), PaymentMethod.BANK_TRANSFER),
    (("ATM",), PaymentMethod.CASH),
    (("ZELLE",), PaymentMethod.ZELLE),
    (("PAYPAL",), PaymentMethod.PAYPAL),
    (("VENMO",), PaymentMethod.VENMO),
)


def classify_payment_method(bank_type: Optional[str]) -> PaymentMethod:
    """Map a bank's transaction type code (e.g. 'DEBIT_CARD', 'ACH_CREDIT').

    Args:
        bank_type: Free-text type code from the export, may be None

    Returns:
        Canonical payment method, OTHER when absent or unrecognized
    """
    if not bank_type:
        return PaymentMethod.OTHER

    code = bank_type.upper()
    for markers, method in _METHOD_CHAIN:
        if any(marker in code for marker in markers):
            return method
    return PaymentMethod.OTHER


def is_deposit_slip(bank_type: Optional[str]) -> bool:
    """Whether the type code denotes a deposit, whose slip # is not a check number."""
    if not bank_type:
        return False
    code = bank_type.upper()
    return any(marker in code for marker in _DEPOSIT_MARKERS)
