"""Main CLI entry point."""

import logging

import click
from moneysaver.database.factories import create_sqlite_database
from moneysaver.domain.store import LedgerStore

# Import and register all commands at module level
from moneysaver.cli.commands import (
    account,
    add,
    transaction,
    summary,
    category,
    settings,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides MONEYSAVER_DB_PATH environment variable)",
    envvar="MONEYSAVER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="MONEYSAVER_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Money Saver - personal finance tracker.

    Keep track of accounts, income, expenses and transfers between accounts.
    Account balances always reflect the recorded transactions.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        store = LedgerStore(db)
        store.load()
        ctx.obj["store"] = store


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
summary.register_commands(cli)
category.register_commands(cli)
settings.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
