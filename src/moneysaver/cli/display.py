"""Shared rendering helpers for CLI output."""

from decimal import Decimal

import click

from moneysaver.domain.entities import Ledger, Transaction, Transfer
from moneysaver.utils.currency import format_currency


def money(ledger: Ledger, amount: Decimal) -> str:
    """Format an amount in the ledger's configured currency."""
    return format_currency(amount, ledger.settings.currency)


def account_label(ledger: Ledger, account_id: str) -> str:
    account = ledger.find_account(account_id)
    return account.name if account else "Unknown Account"


def echo_transaction(ledger: Ledger, txn: Transaction) -> None:
    """Print one transaction as a table row."""
    if isinstance(txn, Transfer):
        where = f"{account_label(ledger, txn.from_account_id)} -> {account_label(ledger, txn.to_account_id)}"
    else:
        where = account_label(ledger, txn.account_id)
    description = (txn.description or "")[:30]
    click.echo(
        f"{txn.id:<28} {txn.date.strftime('%H:%M'):<6} {txn.type.value:<9} "
        f"{money(ledger, txn.amount):>14} {where:<30} {txn.category:<16} {description}"
    )
