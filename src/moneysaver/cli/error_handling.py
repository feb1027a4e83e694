"""CLI error handling helpers."""

import logging
from typing import NoReturn

import click

from moneysaver.domain.errors import DomainError

logger = logging.getLogger(__name__)


def fail(ctx: click.Context, message: str) -> NoReturn:
    """Print an error to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> NoReturn:
    """Render a rejected operation and exit with failure."""
    logger.debug("Command %s rejected: %r", ctx.command_path, error)
    fail(ctx, str(error))
