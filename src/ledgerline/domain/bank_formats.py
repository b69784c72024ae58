"""Bank export profiles and header-based format detection.

Each profile is plain data: the detection predicate is a small tagged tree
(``all_of`` / ``any_of`` / ``has`` / ``header_contains``) evaluated by
``HeaderPredicate.matches`` rather than a callable, so profiles can be listed,
compared and serialized.
"""

from dataclasses import dataclass, field
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from ledgerline.domain.errors import ValidationError
from ledgerline.utils.date_parser import DEFAULT_DATE_FORMATS

logger = logging.getLogger(__name__)

SIGNED = "signed"
SPLIT_DEBIT_CREDIT = "split_debit_credit"

GENERIC_FORMAT_ID = "generic"
CUSTOM_FORMAT_ID = "custom"
AUTO = "auto"

LOGICAL_FIELDS = (
    "date",
    "description",
    "amount",
    "debit",
    "credit",
    "check_number",
    "reference_number",
    "category",
    "type",
)


@dataclass(frozen=True)
class HeaderPredicate:
    """Boolean expression over the set of headers in a file.

    kind is one of:
    - "has": header ``value`` is present
    - "header_contains": some header contains ``value`` as a substring
    - "all_of" / "any_of": combination of ``children``
    """

    kind: str
    value: str = ""
    children: tuple["HeaderPredicate", ...] = ()

    def matches(self, headers: Iterable[str]) -> bool:
        header_set = headers if isinstance(headers, (set, frozenset)) else set(headers)
        if self.kind == "has":
            return self.value in header_set
        if self.kind == "header_contains":
            return any(self.value in h for h in header_set)
        if self.kind == "all_of":
            return all(child.matches(header_set) for child in self.children)
        if self.kind == "any_of":
            return any(child.matches(header_set) for child in self.children)
        raise ValueError(f"Unknown predicate kind '{self.kind}'")

    def to_dict(self) -> dict:
        if self.children:
            return {self.kind: [child.to_dict() for child in self.children]}
        return {self.kind: self.value}


def has(header: str) -> HeaderPredicate:
    return HeaderPredicate("has", header)


def header_contains(text: str) -> HeaderPredicate:
    return HeaderPredicate("header_contains", text)


def all_of(*children: HeaderPredicate) -> HeaderPredicate:
    return HeaderPredicate("all_of", children=children)


def any_of(*children: HeaderPredicate) -> HeaderPredicate:
    return HeaderPredicate("any_of", children=children)


@dataclass(frozen=True)
class BankFormatProfile:
    """How to read one bank's CSV export."""

    id: str
    display_name: str
    detect: HeaderPredicate
    field_aliases: Mapping[str, tuple[str, ...]] = field(hash=False)
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS
    amount_convention: str = SIGNED

    def __post_init__(self):
        object.__setattr__(
            self,
            "field_aliases",
            MappingProxyType({k: tuple(v) for k, v in self.field_aliases.items()}),
        )

    def aliases(self, logical_field: str) -> tuple[str, ...]:
        """Column names for a logical field, empty when the profile has none."""
        return self.field_aliases.get(logical_field, ())

    def matches(self, headers: Iterable[str]) -> bool:
        return self.detect.matches(headers)


# More specific profiles must precede more general ones: the first match wins.
BANK_FORMATS: tuple[BankFormatProfile, ...] = (
    BankFormatProfile(
        id="chase",
        display_name="Chase Bank",
        detect=all_of(has("Posting Date"), has("Description")),
        field_aliases={
            "date": ("Posting Date", "Transaction Date"),
            "description": ("Description",),
            "amount": ("Amount",),
            "check_number": ("Check or Slip #",),
            "type": ("Type",),
        },
        date_formats=("MM/dd/yyyy", "M/d/yyyy"),
    ),
    BankFormatProfile(
        id="capitalOne",
        display_name="Capital One",
        detect=all_of(has("Transaction Date"), has("Debit"), has("Credit")),
        field_aliases={
            "date": ("Transaction Date", "Posted Date"),
            "description": ("Description", "Transaction Description"),
            "debit": ("Debit",),
            "credit": ("Credit",),
        },
        date_formats=("yyyy-MM-dd", "MM/dd/yyyy"),
        amount_convention=SPLIT_DEBIT_CREDIT,
    ),
    BankFormatProfile(
        id="discover",
        display_name="Discover",
        detect=all_of(has("Trans. Date"), has("Amount")),
        field_aliases={
            "date": ("Trans. Date", "Post Date"),
            "description": ("Description",),
            "amount": ("Amount",),
            "category": ("Category",),
        },
        date_formats=("MM/dd/yyyy",),
    ),
    BankFormatProfile(
        id="usBank",
        display_name="US Bank",
        detect=all_of(has("Date"), has("Name"), has("Amount")),
        field_aliases={
            "date": ("Date",),
            "description": ("Name", "Memo"),
            "amount": ("Amount",),
        },
        date_formats=("MM/dd/yyyy", "yyyy-MM-dd"),
    ),
    BankFormatProfile(
        id="amex",
        display_name="American Express",
        detect=all_of(has("Date"), has("Description"), has("Amount"), has("Reference")),
        field_aliases={
            "date": ("Date",),
            "description": ("Description",),
            "amount": ("Amount",),
            "reference_number": ("Reference",),
        },
        date_formats=("MM/dd/yyyy", "MM/dd/yy"),
    ),
    BankFormatProfile(
        id="bankOfAmerica",
        display_name="Bank of America",
        detect=all_of(has("Date"), has("Description"), has("Amount")),
        field_aliases={
            "date": ("Date", "Posted Date"),
            "description": ("Description", "Payee"),
            "amount": ("Amount",),
            "reference_number": ("Reference Number",),
        },
        date_formats=("MM/dd/yyyy", "M/d/yyyy"),
    ),
    BankFormatProfile(
        id="citi",
        display_name="Citibank",
        detect=all_of(has("Date"), has("Description"), any_of(has("Debit"), has("Credit"))),
        field_aliases={
            "date": ("Date",),
            "description": ("Description",),
            "debit": ("Debit",),
            "credit": ("Credit",),
        },
        date_formats=("MM/dd/yyyy",),
        amount_convention=SPLIT_DEBIT_CREDIT,
    ),
    BankFormatProfile(
        id="pnc",
        display_name="PNC Bank",
        detect=all_of(has("Date"), has("Description"), has("Withdrawals")),
        field_aliases={
            "date": ("Date",),
            "description": ("Description",),
            "debit": ("Withdrawals",),
            "credit": ("Deposits",),
        },
        date_formats=("MM/dd/yyyy", "M/d/yyyy"),
        amount_convention=SPLIT_DEBIT_CREDIT,
    ),
    BankFormatProfile(
        id="wellsFargo",
        display_name="Wells Fargo",
        detect=any_of(header_contains("Wells Fargo"), all_of(has("Date"), has("Amount"))),
        field_aliases={
            "date": ("Date",),
            "description": ("Description",),
            "amount": ("Amount",),
        },
        date_formats=("MM/dd/yyyy", "M/d/yyyy"),
    ),
)

GENERIC_PROFILE = BankFormatProfile(
    id=GENERIC_FORMAT_ID,
    display_name="Generic",
    detect=any_of(),
    field_aliases={
        "date": ("Date", "Transaction Date", "Posting Date", "Trans. Date"),
        "description": ("Description", "Memo", "Name", "Payee"),
        "amount": ("Amount", "Debit", "Credit"),
    },
    date_formats=DEFAULT_DATE_FORMATS,
)

_PROFILES_BY_ID = MappingProxyType({p.id: p for p in BANK_FORMATS})


def detect_format(headers: Sequence[str]) -> BankFormatProfile:
    """Pick the first registered profile whose predicate matches the headers.

    Never fails: when nothing matches, the generic profile is returned and
    callers can check ``profile.id == GENERIC_FORMAT_ID`` to ask for a manual
    column mapping.
    """
    header_set = frozenset(headers)
    for profile in BANK_FORMATS:
        if profile.matches(header_set):
            return profile
    return GENERIC_PROFILE


def get_profile(format_id: str) -> Optional[BankFormatProfile]:
    """Get a registered profile by ID (the generic profile included)."""
    if format_id == GENERIC_FORMAT_ID:
        return GENERIC_PROFILE
    return _PROFILES_BY_ID.get(format_id)


def supported_banks() -> list[dict[str, str]]:
    """List registered banks for selection menus."""
    return [{"id": p.id, "name": p.display_name} for p in BANK_FORMATS]


def validate_mapping(mapping: Mapping[str, object]) -> tuple[bool, list[str]]:
    """Validate a manual column mapping.

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []
    if not mapping.get("date"):
        errors.append("Date column is required")
    if not mapping.get("description"):
        errors.append("Description column is required")
    if not mapping.get("amount") and not (mapping.get("debit") or mapping.get("credit")):
        errors.append("Amount column (or Debit/Credit columns) is required")
    return (len(errors) == 0, errors)


def build_custom_profile(
    mapping: Mapping[str, object], date_format: Optional[str] = None
) -> BankFormatProfile:
    """Build a profile from a manual column mapping.

    Args:
        mapping: Logical field -> column name (or list of column names)
        date_format: Optional single date pattern to use instead of the defaults

    Raises:
        ValidationError: If the mapping is incomplete or names unknown fields
    """
    is_valid, errors = validate_mapping(mapping)
    if not is_valid:
        raise ValidationError(", ".join(errors))

    unknown = sorted(set(mapping) - set(LOGICAL_FIELDS))
    if unknown:
        raise ValidationError(
            f"Unknown mapping fields: {', '.join(unknown)}. "
            f"Must be one of: {', '.join(LOGICAL_FIELDS)}"
        )

    aliases = {}
    for logical_field, columns in mapping.items():
        if not columns:
            continue
        aliases[logical_field] = (columns,) if isinstance(columns, str) else tuple(columns)

    split = "amount" not in aliases and ("debit" in aliases or "credit" in aliases)
    return BankFormatProfile(
        id=CUSTOM_FORMAT_ID,
        display_name="Custom",
        detect=any_of(),
        field_aliases=aliases,
        date_formats=(date_format,) if date_format else DEFAULT_DATE_FORMATS,
        amount_convention=SPLIT_DEBIT_CREDIT if split else SIGNED,
    )


def resolve_profile(bank_format: str, headers: Sequence[str]) -> BankFormatProfile:
    """Resolve an explicit bank format ID, or detect one when ``bank_format`` is "auto".

    An unknown ID falls back to the generic profile.
    """
    if bank_format == AUTO:
        return detect_format(headers)
    profile = get_profile(bank_format)
    if profile is None:
        logger.warning("Unknown bank format '%s', using generic profile", bank_format)
        return GENERIC_PROFILE
    return profile
