"""CLI helper for looking up accounts given on the command line."""

import click
from moneysaver.cli.error_handling import fail
from moneysaver.domain.entities import Account
from moneysaver.domain.errors import NotFoundError
from moneysaver.domain.store import LedgerStore
from moneysaver.utils.account_resolver import resolve_account


def resolve_account_or_exit(ctx: click.Context, store: LedgerStore, account: str) -> Account:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(store, account)
    except NotFoundError as exc:
        fail(ctx, str(exc))
