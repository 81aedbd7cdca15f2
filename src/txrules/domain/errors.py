"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def rule_not_found(rule_id: int) -> str:
    """Return message for missing transaction rule."""
    return f"Transaction rule {rule_id} not found"


def rules_not_found(rule_ids: list[int]) -> str:
    """Return message when a reorder request names unknown rules."""
    ids = ", ".join(str(rule_id) for rule_id in rule_ids)
    return f"Transaction rule{'s' if len(rule_ids) != 1 else ''} not found: {ids}"


def invalid_filter_node(path: str, reason: str) -> str:
    """Return message for a malformed filter tree node."""
    return f"Invalid filter at {path}: {reason}"
