"""Main CLI entry point."""

import logging

import click
from ledgerline.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerline.cli.commands import (
    banks,
    classify,
    import_cmd,
    imports,
    preview,
    rule,
    view,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERLINE_DB_PATH environment variable)",
    envvar="LEDGERLINE_DB_PATH",
)
@click.option(
    "--user",
    default="local",
    show_default=True,
    help="Ledger owner the commands act on",
    envvar="LEDGERLINE_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERLINE_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str, log_level: str):
    """Ledgerline - bank statement ingestion.

    Import CSV exports from common US banks, skip transactions already in the
    ledger and categorize new ones with keyword rules.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["user_id"] = user

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
banks.register_commands(cli)
preview.register_commands(cli)
import_cmd.register_commands(cli)
imports.register_commands(cli)
rule.register_commands(cli)
classify.register_commands(cli)
view.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
