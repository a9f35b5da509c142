"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class UnbalancedEntryError(ValidationError):
    """Journal entry debits and credits do not match."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class InvalidStateTransitionError(DomainError):
    """Lifecycle transition not allowed from the entity's current status."""


class ConflictError(DomainError):
    """Stored data changed since it was read."""


class ConfigurationError(DomainError):
    """Required setup data (tax rates, statement mapping) is missing."""


class UnsupportedStatementTypeError(DomainError):
    """Requested financial statement type is not known."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account '{account_id}' not found"


def journal_entry_not_found(entry_id: str) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry '{entry_id}' not found"


def journal_entry_unbalanced(total_debit: Decimal, total_credit: Decimal) -> str:
    """Return message for a journal entry whose sides differ."""
    return (
        "Journal entry is not balanced: "
        f"total debit {total_debit} does not equal total credit {total_credit}"
    )


def journal_entry_not_draft(entry_id: str, status: str) -> str:
    """Return message when posting an entry that is not a draft."""
    return f"Only draft journal entries can be posted; '{entry_id}' is {status}"


def invalid_amount(value: object) -> str:
    """Return message for an amount that is not a finite number."""
    return f"Invalid amount: {value!r}"


def negative_line_amount(account_id: str) -> str:
    """Return message for a journal line with a negative side."""
    return f"Journal line for account '{account_id}' has a negative debit or credit"


def tax_rate_not_configured(tax_type: str) -> str:
    """Return message when no active rate exists for a tax type."""
    return f"No active {tax_type.upper()} tax configuration found"


def stale_write(key: str, expected: int, actual: int) -> str:
    """Return message for an optimistic-concurrency conflict."""
    return (
        f"'{key}' was modified concurrently "
        f"(expected version {expected}, found {actual})"
    )


def unsupported_statement_type(statement_type: str) -> str:
    """Return message for an unknown statement type."""
    return f"Unsupported statement type: {statement_type}"


def unclassified_accounts(codes: list[str]) -> str:
    """Return message when accounts have no statement classification."""
    return (
        "Accounts without a financial statement classification: "
        + ", ".join(codes)
    )
