"""CSV preview command."""

import json

import click
from ledgerline.cli.error_handling import echo_row_errors
from ledgerline.cli.options import bank_options
from ledgerline.domain.bank_formats import AUTO, CUSTOM_FORMAT_ID
from ledgerline.domain.csv_parser import parse_csv_file

MAX_PREVIEW_ROWS = 10


def effective_bank_format(bank: str, mapping: dict | None) -> str:
    """A mapping without an explicit bank format means a custom format."""
    if mapping and bank == AUTO:
        return CUSTOM_FORMAT_ID
    return bank


@click.command("preview")
@click.argument("csv_file", type=click.Path(exists=True))
@bank_options
@click.option("--company", help="Company ID to tag transactions with")
@click.option("--json", "as_json", is_flag=True, help="Print the full parse result as JSON")
@click.pass_context
def preview_csv(ctx, csv_file: str, bank: str, mapping, date_format, company, as_json: bool):
    """Parse a CSV file without storing anything."""
    result = parse_csv_file(
        csv_file,
        bank_format=effective_bank_format(bank, mapping),
        company_id=company,
        custom_mapping=mapping,
        date_format=date_format,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.success:
            ctx.exit(1)
        return

    if not result.success:
        click.echo(f"Error: {result.error}", err=True)
        ctx.exit(1)

    click.echo(f"\nDetected bank: {result.detected_bank_name} ({result.detected_bank})")
    click.echo(f"Columns: {', '.join(result.headers)}")
    click.echo(f"Parsed {result.parsed_count} of {result.total_rows} rows")
    if result.requires_mapping:
        click.echo("Bank not recognized; pass --mapping if the columns were not found.")

    click.echo(f"\n{'Date':<12} {'Type':<8} {'Amount':>12}  {'Method':<14} Description")
    click.echo("-" * 80)
    for txn in result.transactions[:MAX_PREVIEW_ROWS]:
        click.echo(
            f"{txn.date:<12} {txn.type:<8} {txn.amount:>12,.2f}  "
            f"{txn.payment_method.value:<14} {txn.description}"
        )
    if result.parsed_count > MAX_PREVIEW_ROWS:
        click.echo(f"... and {result.parsed_count - MAX_PREVIEW_ROWS} more")

    if result.errors:
        echo_row_errors(result.errors)


def register_commands(cli):
    """Register preview command with main CLI."""
    cli.add_command(preview_csv)
