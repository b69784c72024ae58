"""CLI error handling helpers."""

import logging
from typing import Sequence

import click

from ledgerline.domain.entities import RowError
from ledgerline.domain.errors import DomainError

logger = logging.getLogger(__name__)

MAX_ROW_ERRORS_SHOWN = 20


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a domain error to stderr and exit with status 1."""
    logger.debug("%s in %s: %s", type(error).__name__, ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def echo_row_errors(errors: Sequence[RowError]) -> None:
    """Report rows that were skipped while parsing a CSV file."""
    click.echo(f"  Errors: {len(errors)}")
    for error in errors[:MAX_ROW_ERRORS_SHOWN]:
        click.echo(f"    {error}", err=True)
    if len(errors) > MAX_ROW_ERRORS_SHOWN:
        click.echo(f"    ... and {len(errors) - MAX_ROW_ERRORS_SHOWN} more", err=True)
