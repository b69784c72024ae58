"""CSV import command."""

import click
from ledgerline.cli.options import bank_options
from ledgerline.cli.commands.preview import effective_bank_format
from ledgerline.cli.error_handling import echo_row_errors
from ledgerline.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@bank_options
@click.option("--company", help="Company ID to tag transactions with")
@click.option(
    "--allow-duplicates",
    is_flag=True,
    help="Import rows even if the same date, description and amount already exist",
)
@click.pass_context
def import_csv(ctx, csv_file: str, bank: str, mapping, date_format, company, allow_duplicates: bool):
    """Import transactions from a bank CSV export."""
    db = ctx.obj["db"]
    service = CSVImportService(db)

    parsed, summary = service.import_csv(
        csv_file_path=csv_file,
        user_id=ctx.obj["user_id"],
        bank_format=effective_bank_format(bank, mapping),
        company_id=company,
        skip_duplicates=not allow_duplicates,
        custom_mapping=mapping,
        date_format=date_format,
    )
    if summary is None:
        click.echo(f"Error: {parsed.error}", err=True)
        ctx.exit(1)

    click.echo(f"\nImport complete ({parsed.detected_bank_name}):")
    click.echo(f"  Imported: {summary.imported} transactions")
    click.echo(f"  Skipped: {summary.duplicates} duplicates")
    click.echo(f"  Classified: {summary.classified} (using {summary.rules_applied} rules)")
    if summary.import_id is not None:
        click.echo(f"  Import ID: {summary.import_id}")
    if parsed.errors:
        echo_row_errors(parsed.errors)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
