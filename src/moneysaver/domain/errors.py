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


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account: str) -> str:
    """Return message for an account id or name that matches nothing."""
    return f"Account '{account}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_label(kind: str, name: str) -> str:
    """Return message for a category or account type that already exists."""
    return f"{kind} '{name}' already exists"


def account_type_in_use(name: str, account_count: int) -> str:
    """Return message when an account type is still assigned to accounts."""
    return (
        f"Cannot delete account type '{name}': it is used by "
        f"{account_count} account{'s' if account_count != 1 else ''}."
    )
