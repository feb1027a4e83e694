"""Account management commands."""

from dataclasses import replace

import click
from moneysaver.cli.account_resolution import resolve_account_or_exit
from moneysaver.cli.display import money
from moneysaver.cli.error_handling import handle_domain_error
from moneysaver.domain.queries import LedgerQueries
from moneysaver.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", default="cash", show_default=True, help="Account type (e.g. cash, bank, credit)")
@click.option("--balance", default="0", show_default=True, help="Opening balance")
@click.pass_context
def create_account(ctx, name: str, account_type: str, balance: str):
    """Create a new account.

    Credit accounts hold what you owe; their balance is subtracted from the
    total balance.

    Examples:
        moneysaver account create "Wallet"
        moneysaver account create "Checking" --type bank --balance 1500
        moneysaver account create "Visa" --type credit
    """
    store = ctx.obj["store"]

    try:
        opening = parse_amount(balance)
        account = store.create_account(name=name, balance=opening, type=account_type)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created account '{account.name}' (ID: {account.id})")
    if account_type.lower() not in {t.lower() for t in store.ledger.settings.account_types}:
        click.echo(f"Note: '{account_type}' is not one of the configured account types")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    store = ctx.obj["store"]
    ledger = store.ledger

    if not ledger.accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in ledger.accounts:
        click.echo(
            f"ID: {acc.id:<28} | {acc.name:20s} | {acc.type:10s} | {money(ledger, acc.balance):>14}"
        )
    click.echo("-" * 80)
    click.echo(f"Total balance: {money(ledger, LedgerQueries(store).total_balance())}")


@account_group.command("edit")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", help="New account type")
@click.option("--balance", help="New balance (does not touch transactions)")
@click.pass_context
def edit_account(ctx, account: str, name: str | None, account_type: str | None, balance: str | None) -> None:
    """Edit an account.

    ACCOUNT can be an account name or ID. Only the given fields change.
    Setting --balance overwrites the balance without recording a transaction.

    Examples:
        moneysaver account edit "Wallet" --name "Pocket Money"
        moneysaver account edit acc-2 --balance 2500
    """
    store = ctx.obj["store"]
    current = resolve_account_or_exit(ctx, store, account)

    changes = {}
    if name is not None:
        changes["name"] = name
    if account_type is not None:
        changes["type"] = account_type
    try:
        if balance is not None:
            changes["balance"] = parse_amount(balance)
        if not changes:
            click.echo("Nothing to change.")
            return
        store.edit_account(replace(current, **changes))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated account '{store.ledger.find_account(current.id).name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account and all of its transactions.

    ACCOUNT can be an account name or ID.

    Every transaction that touches the account is removed with it, including
    transfers to or from other accounts. Balances of other accounts are not
    adjusted.

    Examples:
        moneysaver account delete "Wallet"
        moneysaver account delete acc-1
    """
    store = ctx.obj["store"]
    account_obj = resolve_account_or_exit(ctx, store, account)

    affected = LedgerQueries(store).transactions_for_account(account_obj.id)
    if affected:
        click.echo(
            f"Account '{account_obj.name}' has {len(affected)} transaction"
            f"{'s' if len(affected) != 1 else ''} that will also be deleted."
        )

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_obj.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    store.delete_account(account_obj.id)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
