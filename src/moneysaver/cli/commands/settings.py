"""Settings and account type commands."""

import click
from moneysaver.cli.error_handling import handle_domain_error
from moneysaver.domain.errors import DomainError
from moneysaver.domain.settings import SUPPORTED_CURRENCIES, SettingsService


@click.group()
def settings_group():
    """View and change preferences."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current settings."""
    settings = ctx.obj["store"].ledger.settings
    click.echo(f"Currency:                 {settings.currency}")
    click.echo(f"Date format:              {settings.date_format}")
    click.echo(f"Income categories:        {', '.join(settings.income_categories)}")
    click.echo(f"Expense categories:       {', '.join(settings.expense_categories)}")
    click.echo(f"Account types:            {', '.join(settings.account_types)}")
    click.echo(f"Default income category:  {settings.default_income_category or '-'}")
    click.echo(f"Default expense category: {settings.default_expense_category or '-'}")


@settings_group.command("currency")
@click.argument("code", type=click.Choice(SUPPORTED_CURRENCIES, case_sensitive=False))
@click.pass_context
def set_currency(ctx, code: str):
    """Choose the currency used to display amounts."""
    try:
        SettingsService(ctx.obj["store"]).set_currency(code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Currency set to {code.upper()}")


@click.group()
def account_type_group():
    """Manage account types."""
    pass


@account_type_group.command("list")
@click.pass_context
def list_account_types(ctx):
    """List account types with the number of accounts using each."""
    ledger = ctx.obj["store"].ledger
    if not ledger.settings.account_types:
        click.echo("No account types configured.")
        return
    for name in ledger.settings.account_types:
        count = sum(1 for acc in ledger.accounts if acc.type == name)
        click.echo(f"{name:<24} {count} account{'s' if count != 1 else ''}")


@account_type_group.command("add")
@click.argument("name")
@click.pass_context
def add_account_type(ctx, name: str):
    """Add an account type."""
    try:
        SettingsService(ctx.obj["store"]).add_account_type(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Added account type '{name.strip()}'")


@account_type_group.command("delete")
@click.argument("name")
@click.pass_context
def delete_account_type(ctx, name: str):
    """Delete an account type that no account uses."""
    try:
        SettingsService(ctx.obj["store"]).delete_account_type(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted account type '{name}'")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
    cli.add_command(account_type_group, name="account-type")
