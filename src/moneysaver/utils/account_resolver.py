"""Utility for resolving account names to IDs."""

from moneysaver.domain.entities import Account
from moneysaver.domain.errors import NotFoundError, account_not_found
from moneysaver.domain.store import LedgerStore


def resolve_account(store: LedgerStore, account: str) -> Account:
    """Resolve account ID or exact name to the account.

    Ids are tried first, so an account named like another account's id
    can only be reached by its own id.

    Args:
        store: LedgerStore instance
        account: Account id or name

    Returns:
        The matching account

    Raises:
        NotFoundError: If no account matches
    """
    ledger = store.ledger
    found = ledger.find_account(account)
    if found is not None:
        return found

    for acc in ledger.accounts:
        if acc.name == account:
            return acc

    raise NotFoundError(account_not_found(account))
