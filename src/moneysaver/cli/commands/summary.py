"""Balance and summary commands."""

from datetime import date

import click
from moneysaver.cli.display import echo_transaction, money
from moneysaver.cli.error_handling import fail
from moneysaver.domain.queries import LedgerQueries
from moneysaver.utils.date_parser import parse_date


@click.command("balance")
@click.pass_context
def balance(ctx):
    """Show account balances and the total balance.

    Credit accounts are subtracted from the total since they hold debt.
    """
    store = ctx.obj["store"]
    ledger = store.ledger

    for acc in ledger.accounts:
        marker = " (credit)" if acc.is_credit else ""
        click.echo(f"{acc.name + marker:<32} {money(ledger, acc.balance):>16}")
    click.echo("-" * 49)
    click.echo(f"{'Total balance':<32} {money(ledger, LedgerQueries(store).total_balance()):>16}")


@click.command("summary")
@click.option("--date", "day", help="Day to summarize (YYYY-MM-DD or 'today', 'yesterday'); defaults to today")
@click.pass_context
def summary(ctx, day: str | None):
    """Summarize one day: income, expenses, net change and categories."""
    store = ctx.obj["store"]
    ledger = store.ledger

    target = date.today()
    if day:
        try:
            target = parse_date(day)
        except ValueError as e:
            fail(ctx, f"Invalid date: {e}")

    report = LedgerQueries(store).daily_summary(target)

    click.echo(f"\nSummary for {target.strftime('%A, %B %d, %Y')}")
    click.echo("=" * 60)
    click.echo(f"{'Income':<20} {money(ledger, report.totals.income):>20}")
    click.echo(f"{'Expenses':<20} {money(ledger, report.totals.expense):>20}")
    click.echo(f"{'Net change':<20} {money(ledger, report.totals.net):>20}")

    if report.expenses_by_category:
        click.echo("\nExpenses by category:")
        for category, amount in report.expenses_by_category:
            click.echo(f"  {category:<30} {money(ledger, amount):>16}")

    if report.income_by_category:
        click.echo("\nIncome by category:")
        for category, amount in report.income_by_category:
            click.echo(f"  {category:<30} {money(ledger, amount):>16}")

    if not report.transactions:
        click.echo("\nNo transactions on this day.")
        return

    click.echo(f"\nTransactions ({len(report.transactions)}):")
    for txn in report.transactions:
        echo_transaction(ledger, txn)


@click.command("recent")
@click.option("--days", default=7, show_default=True, type=click.IntRange(min=1), help="Number of days with activity to show")
@click.pass_context
def recent(ctx, days: int):
    """Show totals for the most recent days that have transactions."""
    store = ctx.obj["store"]
    ledger = store.ledger

    groups = LedgerQueries(store).recent_days(limit=days)
    if not groups:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'Day':<12} {'Income':>16} {'Expenses':>16} {'Net':>16} {'Count':>6}")
    click.echo("-" * 70)
    for group in groups:
        click.echo(
            f"{group.day.isoformat():<12} {money(ledger, group.totals.income):>16} "
            f"{money(ledger, group.totals.expense):>16} {money(ledger, group.totals.net):>16} "
            f"{len(group.transactions):>6}"
        )


def register_commands(cli):
    """Register balance and summary commands with main CLI."""
    cli.add_command(balance)
    cli.add_command(summary)
    cli.add_command(recent)
