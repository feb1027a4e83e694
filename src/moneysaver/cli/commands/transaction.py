"""Transaction management commands."""

import click
from moneysaver.cli.account_resolution import resolve_account_or_exit
from moneysaver.cli.date_filters import resolve_cli_date_range, to_timestamp_range
from moneysaver.cli.display import echo_transaction, money
from moneysaver.cli.error_handling import fail, handle_domain_error
from moneysaver.domain.entities import Transfer, TransactionType
from moneysaver.domain.errors import transaction_not_found
from moneysaver.domain.queries import LedgerQueries
from moneysaver.domain.settings import SettingsService
from moneysaver.domain.validation import build_transaction
from moneysaver.utils.amount_parser import parse_amount

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--account", help="Only transactions touching this account (name or ID)")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Only transactions of this type")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--today", is_flag=True, help="Filter to today")
@click.option("--this-week", is_flag=True, help="Filter to current week")
@click.option("--this-month", is_flag=True, help="Filter to current month")
@click.option("--this-year", is_flag=True, help="Filter to current year")
@click.option("--last-week", is_flag=True, help="Filter to previous week")
@click.option("--last-month", is_flag=True, help="Filter to previous month")
@click.option("--last-year", is_flag=True, help="Filter to previous year")
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    txn_type: str | None,
    start_date: str | None,
    end_date: str | None,
    today: bool,
    this_week: bool,
    this_month: bool,
    this_year: bool,
    last_week: bool,
    last_month: bool,
    last_year: bool,
):
    """View transactions grouped by day, newest day first.

    Dates are interpreted in local time and both ends are inclusive.
    """
    store = ctx.obj["store"]
    queries = LedgerQueries(store)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "today": today,
            "this-week": this_week,
            "this-month": this_month,
            "this-year": this_year,
            "last-week": last_week,
            "last-month": last_month,
            "last-year": last_year,
        },
    )

    bounds = to_timestamp_range(start, end)
    if bounds is not None:
        transactions = queries.transactions_in_range(*bounds)
    else:
        transactions = list(store.ledger.transactions)

    if account:
        account_id = resolve_account_or_exit(ctx, store, account).id
        transactions = [txn for txn in transactions if txn.references(account_id)]
    if txn_type:
        transactions = [txn for txn in transactions if txn.type.value == txn_type.lower()]

    if not transactions:
        click.echo("No transactions found.")
        return

    ledger = store.ledger
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    for group in queries.group_by_day(transactions):
        click.echo("")
        click.echo(
            f"{group.day.isoformat()}  income {money(ledger, group.totals.income)} | "
            f"expense {money(ledger, group.totals.expense)} | net {money(ledger, group.totals.net)}"
        )
        click.echo("-" * 120)
        for txn in group.transactions:
            echo_transaction(ledger, txn)

    totals = queries.period_totals(transactions)
    click.echo("-" * 120)
    click.echo(
        f"TOTAL  Income: {money(ledger, totals.income)} | Expenses: {money(ledger, totals.expense)} | "
        f"Net: {money(ledger, totals.net)} | Count: {len(transactions)}"
    )


@transaction_group.command("edit")
@click.argument("transaction_id")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="New transaction type")
@click.option("--amount", help="New amount (positive)")
@click.option("--account", help="Account name or ID (income and expense)")
@click.option("--from", "from_account", help="Source account name or ID (transfer)")
@click.option("--to", "to_account", help="Destination account name or ID (transfer)")
@click.option("--category", help="Category (income and expense)")
@click.option("--description", help="Description, or empty string to clear")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: str,
    txn_type: str | None,
    amount: str | None,
    account: str | None,
    from_account: str | None,
    to_account: str | None,
    category: str | None,
    description: str | None,
) -> None:
    """Edit a transaction.

    The old effect on balances is reverted and the edited transaction is
    applied in full, so the type can change too. Fields not given keep
    their current value.

    Examples:
        moneysaver transaction edit tx-1718000000000-abc --amount 42
        moneysaver transaction edit tx-1718000000000-abc --type income --category Salary
        moneysaver transaction edit tx-1718000000000-abc --type transfer --to Cash
    """
    store = ctx.obj["store"]
    old = store.ledger.find_transaction(transaction_id)
    if old is None:
        fail(ctx, transaction_not_found(transaction_id))

    new_type = TransactionType(txn_type.lower()) if txn_type else old.type

    account_id = old.account_id
    if account is not None:
        account_id = resolve_account_or_exit(ctx, store, account).id
    from_account_id = old.from_account_id if isinstance(old, Transfer) else old.account_id
    if from_account is not None:
        from_account_id = resolve_account_or_exit(ctx, store, from_account).id
    to_account_id = old.to_account_id if isinstance(old, Transfer) else None
    if to_account is not None:
        to_account_id = resolve_account_or_exit(ctx, store, to_account).id

    if category is None and new_type is not TransactionType.TRANSFER:
        category = old.category if new_type is old.type else SettingsService(store).default_category(new_type)

    if description is None:
        description = old.description

    try:
        new = build_transaction(
            old.id,
            old.date,
            new_type,
            parse_amount(amount) if amount is not None else old.amount,
            account_id=account_id,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            category=category,
            description=description,
        )
        store.edit_transaction(new)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction and undo its effect on balances.

    Examples:
        moneysaver transaction delete tx-1718000000000-abc
    """
    store = ctx.obj["store"]

    txn = store.ledger.find_transaction(transaction_id)
    if txn is None:
        fail(ctx, transaction_not_found(transaction_id))

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    store.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
