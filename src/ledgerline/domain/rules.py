"""Classification rule domain service."""

from typing import Optional

from ledgerline.database.base import Database
from ledgerline.domain.entities import ClassificationRule
from ledgerline.domain.errors import (
    NotFoundError,
    ValidationError,
    empty_rule_pattern,
    rule_not_found,
)


class RuleService:
    """Service for managing classification rules."""

    def __init__(self, db: Database):
        """Initialize rule service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_rule(
        self,
        user_id: str,
        pattern: str,
        category: str,
        priority: int = 0,
        is_active: bool = True,
    ) -> int:
        """Create a classification rule.

        Args:
            user_id: Rule owner
            pattern: Comma-separated keywords (e.g. "uber, lyft")
            category: Category assigned on match
            priority: Higher priorities are tried first
            is_active: Whether the rule takes part in classification

        Returns:
            Rule ID

        Raises:
            ValidationError: If the pattern has no keywords or category is blank
        """
        if not [k for k in pattern.split(",") if k.strip()]:
            raise ValidationError(empty_rule_pattern(pattern))
        if not category or not category.strip():
            raise ValidationError("Rule category is required")

        return self.db.create_rule(
            user_id=user_id,
            pattern=pattern.strip(),
            category=category.strip(),
            priority=priority,
            is_active=is_active,
        )

    def get_rule(self, user_id: str, rule_id: int) -> Optional[ClassificationRule]:
        """Get a rule owned by the user, or None."""
        rule = self.db.get_rule(rule_id)
        if rule is None or rule.user_id != user_id:
            return None
        return rule

    def list_rules(self, user_id: str, active_only: bool = False) -> list[ClassificationRule]:
        """List the user's rules, highest priority first."""
        return self.db.list_rules(user_id, active_only=active_only)

    def set_active(self, user_id: str, rule_id: int, is_active: bool) -> None:
        """Enable or disable a rule.

        Raises:
            NotFoundError: If the rule doesn't exist for this user
        """
        if self.get_rule(user_id, rule_id) is None:
            raise NotFoundError(rule_not_found(rule_id))
        self.db.update_rule_active(rule_id, is_active)

    def delete_rule(self, user_id: str, rule_id: int) -> None:
        """Delete a rule.

        Raises:
            NotFoundError: If the rule doesn't exist for this user
        """
        if self.get_rule(user_id, rule_id) is None:
            raise NotFoundError(rule_not_found(rule_id))
        self.db.delete_rule(rule_id)
