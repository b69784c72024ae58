"""Supported bank listing command."""

import json

import click
from ledgerline.domain.bank_formats import BANK_FORMATS, supported_banks


@click.command("banks")
@click.option("--json", "as_json", is_flag=True, help="Include detection rules and columns as JSON")
def list_banks(as_json: bool):
    """List bank formats that can be detected automatically."""
    if as_json:
        banks = [
            {
                "id": profile.id,
                "name": profile.display_name,
                "detect": profile.detect.to_dict(),
                "columns": {name: list(aliases) for name, aliases in profile.field_aliases.items()},
                "amountConvention": profile.amount_convention,
            }
            for profile in BANK_FORMATS
        ]
        click.echo(json.dumps(banks, indent=2))
        return

    click.echo("\nSupported banks:")
    for bank in supported_banks():
        click.echo(f"  {bank['id']:<15} {bank['name']}")
    click.echo("\nUnrecognized files are read with the generic column names.")


def register_commands(cli):
    """Register banks command with main CLI."""
    cli.add_command(list_banks)
