"""Category management commands."""

import click
from moneysaver.cli.error_handling import handle_domain_error
from moneysaver.domain.errors import DomainError
from moneysaver.domain.settings import SettingsService

KIND_CHOICE = click.Choice(["income", "expense"], case_sensitive=False)


@click.group()
def category_group():
    """Manage income and expense categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories; the default of each kind is marked with '*'."""
    service = SettingsService(ctx.obj["store"])

    for kind in ("income", "expense"):
        default = service.default_category(kind)
        click.echo(f"\n{kind.capitalize()} categories:")
        categories = service.list_categories(kind)
        if not categories:
            click.echo("  (none)")
        for name in categories:
            marker = " *" if name == default else ""
            click.echo(f"  {name}{marker}")


@category_group.command("add")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("name")
@click.pass_context
def add_category(ctx, kind: str, name: str):
    """Add a category.

    Examples:
        moneysaver category add expense Groceries
        moneysaver category add income Freelance
    """
    service = SettingsService(ctx.obj["store"])
    try:
        service.add_category(kind.lower(), name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Added {kind.lower()} category '{name.strip()}'")


@category_group.command("delete")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_category(ctx, kind: str, name: str, yes: bool):
    """Delete a category.

    Existing transactions keep the category label.
    """
    service = SettingsService(ctx.obj["store"])
    if not yes and not click.confirm(f"Are you sure you want to delete the category '{name}'?"):
        click.echo("Deletion cancelled.")
        return
    try:
        service.delete_category(kind.lower(), name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted {kind.lower()} category '{name}'")


@category_group.command("default")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("name")
@click.pass_context
def set_default(ctx, kind: str, name: str):
    """Set the category used when none is given."""
    service = SettingsService(ctx.obj["store"])
    try:
        service.set_default_category(kind.lower(), name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Default {kind.lower()} category set to '{name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
