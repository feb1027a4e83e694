"""Balance engine: the effect a transaction has on account balances.

All functions are pure. They take an account collection and return a new
tuple of accounts; the input is never modified. An edit is always a full
revert of the old transaction followed by a full apply of the new one, so a
change of transaction type needs no special handling.

Effects aimed at an account id that is not in the collection are skipped.
Use ``missing_accounts`` to detect that case before applying.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Mapping

from moneysaver.domain.entities import Account, Expense, Income, Transaction, Transfer


def effect_of(txn: Transaction) -> dict[str, Decimal]:
    """Return the signed balance change per account id for a transaction."""
    if isinstance(txn, Income):
        return {txn.account_id: txn.amount}
    if isinstance(txn, Expense):
        return {txn.account_id: -txn.amount}
    if isinstance(txn, Transfer):
        deltas = {txn.from_account_id: -txn.amount}
        deltas[txn.to_account_id] = deltas.get(txn.to_account_id, Decimal("0")) + txn.amount
        return deltas
    raise TypeError(f"Unsupported transaction type: {type(txn).__name__}")


def _shift(accounts: Iterable[Account], deltas: Mapping[str, Decimal], sign: int) -> tuple[Account, ...]:
    result = []
    for account in accounts:
        delta = deltas.get(account.id)
        if delta:
            account = replace(account, balance=account.balance + sign * delta)
        result.append(account)
    return tuple(result)


def apply_effect(accounts: Iterable[Account], txn: Transaction) -> tuple[Account, ...]:
    """Return accounts with the transaction's effect applied once."""
    return _shift(accounts, effect_of(txn), 1)


def revert_effect(accounts: Iterable[Account], txn: Transaction) -> tuple[Account, ...]:
    """Return accounts with the transaction's effect undone.

    Exact inverse of ``apply_effect`` when every referenced account exists.
    """
    return _shift(accounts, effect_of(txn), -1)


def replace_effect(
    accounts: Iterable[Account], old: Transaction, new: Transaction
) -> tuple[Account, ...]:
    """Return accounts as if ``old`` had been deleted and ``new`` created."""
    return apply_effect(revert_effect(accounts, old), new)


def missing_accounts(accounts: Iterable[Account], txn: Transaction) -> list[str]:
    """Return ids the transaction touches that are absent from ``accounts``."""
    known = {account.id for account in accounts}
    return [account_id for account_id in effect_of(txn) if account_id not in known]
