"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist or belongs to another user."""


def import_not_found(import_id: int) -> str:
    """Return message for a missing or foreign CSV import."""
    return f"CSV import {import_id} not found or access denied"


def rule_not_found(rule_id: int) -> str:
    """Return message for a missing classification rule."""
    return f"Classification rule {rule_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for a missing transaction."""
    return f"Transaction {transaction_id} not found"


def empty_rule_pattern(pattern: str) -> str:
    """Return message when a rule pattern has no usable keywords."""
    return f"Rule pattern '{pattern}' contains no keywords"
