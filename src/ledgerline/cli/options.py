"""Shared click options for commands that parse CSV files."""

import json

import click

from ledgerline.domain.bank_formats import AUTO


def parse_mapping(ctx, param, value):
    """Parse a JSON column mapping given on the command line."""
    if value is None:
        return None
    try:
        mapping = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}")
    if not isinstance(mapping, dict):
        raise click.BadParameter("Mapping must be a JSON object")
    return mapping


def bank_options(command):
    """Add --bank, --mapping and --date-format to a command."""
    command = click.option(
        "--date-format",
        help="Date pattern for a custom mapping, e.g. dd/MM/yyyy",
    )(command)
    command = click.option(
        "--mapping",
        callback=parse_mapping,
        help='Column mapping as JSON, e.g. \'{"date": "Fecha", "description": "Concepto", "amount": "Importe"}\'',
    )(command)
    command = click.option(
        "--bank",
        default=AUTO,
        show_default=True,
        help="Bank format ID, 'auto' to detect or 'custom' with --mapping",
    )(command)
    return command
