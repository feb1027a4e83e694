"""Add transaction commands."""

import click
from moneysaver.cli.account_resolution import resolve_account_or_exit
from moneysaver.cli.display import money
from moneysaver.cli.error_handling import fail, handle_domain_error
from moneysaver.domain.entities import TransactionType
from moneysaver.domain.settings import SettingsService
from moneysaver.utils.amount_parser import parse_amount


@click.group("add")
def add_group():
    """Record income, an expense or a transfer."""
    pass


def _add_single_account(ctx, txn_type: TransactionType, account: str, amount: str, category, description):
    store = ctx.obj["store"]
    account_obj = resolve_account_or_exit(ctx, store, account)

    if category is None:
        category = SettingsService(store).default_category(txn_type)
        if category is None:
            fail(ctx, f"No --category given and no default {txn_type.value} category is set")

    known = SettingsService(store).list_categories(txn_type)
    try:
        txn = store.create_transaction(
            type=txn_type,
            amount=parse_amount(amount),
            account_id=account_obj.id,
            category=category,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    ledger = store.ledger
    click.echo(f"Created {txn_type.value} {txn.id}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Amount: {money(ledger, txn.amount)}")
    click.echo(f"  Category: {txn.category}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    click.echo(f"  New balance: {money(ledger, ledger.find_account(account_obj.id).balance)}")
    if txn.category not in known:
        click.echo(f"Note: '{txn.category}' is not one of the configured {txn_type.value} categories")


@add_group.command("income")
@click.option("--account", required=True, help="Account name or ID receiving the money")
@click.option("--amount", required=True, help="Amount received (positive)")
@click.option("--category", help="Income category (defaults to the configured default)")
@click.option("--description", help="Description")
@click.pass_context
def add_income(ctx, account: str, amount: str, category: str | None, description: str | None):
    """Record income into an account.

    Examples:
        moneysaver add income --account "Bank Account" --amount 2500 --category Salary
    """
    _add_single_account(ctx, TransactionType.INCOME, account, amount, category, description)


@add_group.command("expense")
@click.option("--account", required=True, help="Account name or ID paying")
@click.option("--amount", required=True, help="Amount spent (positive)")
@click.option("--category", help="Expense category (defaults to the configured default)")
@click.option("--description", help="Description")
@click.pass_context
def add_expense(ctx, account: str, amount: str, category: str | None, description: str | None):
    """Record an expense paid from an account.

    Examples:
        moneysaver add expense --account Cash --amount 12.50 --category Food --description "Lunch"
    """
    _add_single_account(ctx, TransactionType.EXPENSE, account, amount, category, description)


@add_group.command("transfer")
@click.option("--from", "from_account", required=True, help="Source account name or ID")
@click.option("--to", "to_account", required=True, help="Destination account name or ID")
@click.option("--amount", required=True, help="Amount moved (positive)")
@click.option("--description", help="Description")
@click.pass_context
def add_transfer(ctx, from_account: str, to_account: str, amount: str, description: str | None):
    """Move money between two accounts.

    Examples:
        moneysaver add transfer --from "Bank Account" --to Cash --amount 100
        moneysaver add transfer --from "Bank Account" --to "Credit Card" --amount 300 --description "Card payment"
    """
    store = ctx.obj["store"]
    source = resolve_account_or_exit(ctx, store, from_account)
    destination = resolve_account_or_exit(ctx, store, to_account)

    try:
        txn = store.create_transaction(
            type=TransactionType.TRANSFER,
            amount=parse_amount(amount),
            from_account_id=source.id,
            to_account_id=destination.id,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    ledger = store.ledger
    click.echo(f"Created transfer {txn.id}")
    click.echo(f"  From: {source.name} ({money(ledger, ledger.find_account(source.id).balance)})")
    click.echo(f"  To: {destination.name} ({money(ledger, ledger.find_account(destination.id).balance)})")
    click.echo(f"  Amount: {money(ledger, txn.amount)}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")


def register_commands(cli):
    """Register add commands with main CLI."""
    cli.add_command(add_group)
