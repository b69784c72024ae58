"""Transaction viewing command."""

from datetime import date

import click
from ledgerline.cli.error_handling import handle_domain_error
from ledgerline.domain.errors import NotFoundError, transaction_not_found
from ledgerline.domain.transaction import TransactionService
from ledgerline.utils.date_parser import normalize_date


def _parse_cli_date(ctx, value: str | None, label: str) -> date | None:
    if not value:
        return None
    iso = normalize_date(value)
    if iso is None:
        click.echo(f"Error: Invalid {label} date: {value}", err=True)
        ctx.exit(1)
    return date.fromisoformat(iso)


@click.command("view")
@click.option("--id", "transaction_id", type=int, help="Show a single transaction in detail")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.option("--company", help="Company ID")
@click.option("--uncategorized", is_flag=True, help="Only transactions without a category")
@click.pass_context
def view_transactions(
    ctx, transaction_id: int, start_date: str, end_date: str, company: str, uncategorized: bool
):
    """View stored transactions with optional filters."""
    service = TransactionService(ctx.obj["db"])
    user_id = ctx.obj["user_id"]

    if transaction_id is not None:
        txn = service.get_transaction(user_id, transaction_id)
        if txn is None:
            handle_domain_error(ctx, NotFoundError(transaction_not_found(transaction_id)))
            return
        click.echo(f"\nTransaction ID: {txn.id}")
        click.echo(f"  Date: {txn.date}")
        click.echo(f"  Amount: {txn.amount:,.2f} ({txn.type})")
        click.echo(f"  Description: {txn.description}")
        if txn.original_description and txn.original_description != txn.description:
            click.echo(f"  Original description: {txn.original_description}")
        click.echo(f"  Category: {txn.category or 'Uncategorized'}")
        click.echo(f"  Payment method: {txn.payment_method}")
        if txn.check_number:
            click.echo(f"  Check number: {txn.check_number}")
        if txn.reference_number:
            click.echo(f"  Reference: {txn.reference_number}")
        if txn.bank_name:
            click.echo(f"  Bank: {txn.bank_name}")
        if txn.csv_import_id is not None:
            click.echo(f"  Import ID: {txn.csv_import_id}")
        return

    start = _parse_cli_date(ctx, start_date, "start")
    end = _parse_cli_date(ctx, end_date, "end")

    try:
        transactions = service.list_transactions(
            user_id,
            start_date=start,
            end_date=end,
            company_id=company,
            uncategorized=uncategorized,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>12}  {'Category':<20} Description")
    click.echo("-" * 90)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {txn.date.isoformat():<12} {txn.type:<8} {txn.amount:>12,.2f}  "
            f"{(txn.category or 'Uncategorized'):<20} {txn.description}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
