"""Keyword rule classification of uncategorized transactions."""

from collections import defaultdict
from dataclasses import dataclass
import logging
from typing import Iterable, Optional, Protocol

from ledgerline.database.base import Database
from ledgerline.domain.entities import ClassificationRule

logger = logging.getLogger(__name__)


class Classifiable(Protocol):
    id: int
    description: Optional[str]
    payee: Optional[str]


def match_text(description: Optional[str], payee: Optional[str]) -> str:
    """Lower-cased text that rule keywords are matched against."""
    return f"{description or ''} {payee or ''}".lower()


class ClassificationEngine:
    """Applies priority-ordered keyword rules.

    Rules are ordered by priority, highest first; equal priorities keep the
    order they were given in. The first rule with any keyword contained in
    the text wins, so a high-priority "uber" rule beats a lower-priority
    "uber eats" rule. Matching is plain substring search: "ups" matches
    "startups".
    """

    def __init__(self, rules: Iterable[ClassificationRule]):
        self.rules = sorted(
            (r for r in rules if r.is_active and r.keywords),
            key=lambda r: r.priority,
            reverse=True,
        )

    def match(self, text: str) -> Optional[ClassificationRule]:
        text = text.lower()
        for rule in self.rules:
            if any(keyword in text for keyword in rule.keywords):
                return rule
        return None

    def categorize(self, description: Optional[str], payee: Optional[str] = None) -> Optional[str]:
        rule = self.match(match_text(description, payee))
        return rule.category if rule else None

    def plan(self, transactions: Iterable[Classifiable]) -> dict[str, list[int]]:
        """Group transaction IDs by the category their first matching rule assigns.

        Unmatched transactions are left out.
        """
        updates: dict[str, list[int]] = defaultdict(list)
        for txn in transactions:
            category = self.categorize(txn.description, txn.payee)
            if category is not None:
                updates[category].append(txn.id)
        return dict(updates)


@dataclass(frozen=True)
class ClassificationResult:
    """How many transactions were categorized, and how many active rules were used."""

    classified: int
    rules: int


class ClassificationService:
    """Service for applying a user's rules to stored transactions."""

    def __init__(self, db: Database):
        """Initialize classification service.

        Args:
            db: Database instance
        """
        self.db = db

    def apply_rules(
        self, user_id: str, transaction_ids: Optional[list[int]] = None
    ) -> ClassificationResult:
        """Categorize the user's uncategorized transactions.

        Only uncategorized transactions are selected, so running this again
        is a no-op for rows it already handled. Updates are issued as one
        batch per category.

        Args:
            user_id: Ledger owner
            transaction_ids: Optional subset of transactions to consider

        Returns:
            ClassificationResult with the number of transactions classified
            and the number of active rules
        """
        engine = ClassificationEngine(self.db.list_rules(user_id, active_only=True))
        if not engine.rules:
            return ClassificationResult(classified=0, rules=0)

        if transaction_ids is not None and len(transaction_ids) == 0:
            return ClassificationResult(classified=0, rules=len(engine.rules))

        transactions = self.db.list_transactions(
            user_id=user_id, uncategorized=True, transaction_ids=transaction_ids
        )

        classified = 0
        for category, ids in engine.plan(transactions).items():
            classified += self.db.update_transactions_category(user_id, ids, category)

        logger.info(
            "Classified %d of %d uncategorized transactions for user %s using %d rules",
            classified,
            len(transactions),
            user_id,
            len(engine.rules),
        )
        return ClassificationResult(classified=classified, rules=len(engine.rules))
