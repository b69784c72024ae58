"""CSV import history commands."""

import click
from ledgerline.cli.error_handling import handle_domain_error
from ledgerline.domain.csv_import import CSVImportService, STATUS_COMPLETED
from ledgerline.domain.errors import NotFoundError, import_not_found


@click.group()
def imports_group():
    """Manage past CSV imports."""
    pass


@imports_group.command("list")
@click.option(
    "--status",
    type=click.Choice([STATUS_COMPLETED, "deleted", "all"]),
    default=STATUS_COMPLETED,
    show_default=True,
)
@click.option("--company", help="Only imports for this company ID")
@click.option("--limit", type=int, default=50, show_default=True)
@click.option("--offset", type=int, default=0, show_default=True)
@click.pass_context
def list_imports(ctx, status: str, company: str, limit: int, offset: int):
    """List imports, newest first."""
    service = CSVImportService(ctx.obj["db"])
    records = service.list_imports(
        ctx.obj["user_id"], status=status, company_id=company, limit=limit, offset=offset
    )
    if not records:
        click.echo("No imports found.")
        return

    row_format = "{:<6} {:<20} {:<20} {:>5} {:>5} {:>5}  {}"
    click.echo("\n" + row_format.format("ID", "Created", "Bank", "Rows", "Dups", "Errs", "File"))
    click.echo("-" * 90)
    for record in records:
        click.echo(
            row_format.format(
                record.id,
                f"{record.created_at:%Y-%m-%d %H:%M:%S}",
                record.bank_name or record.bank_format,
                record.transaction_count,
                record.duplicate_count,
                record.error_count,
                record.file_name,
            )
        )


@imports_group.command("show")
@click.argument("import_id", type=int)
@click.pass_context
def show_import(ctx, import_id: int):
    """Show an import and its transactions."""
    service = CSVImportService(ctx.obj["db"])
    record = service.get_import(ctx.obj["user_id"], import_id)
    if record is None:
        handle_domain_error(ctx, NotFoundError(import_not_found(import_id)))
        return

    click.echo(f"\nImport {record.id}: {record.file_name}")
    click.echo(f"  Status: {record.status}")
    click.echo(f"  Bank: {record.bank_name or record.bank_format}")
    if record.company_id:
        click.echo(f"  Company: {record.company_id}")
    if record.date_range_start:
        click.echo(f"  Dates: {record.date_range_start} to {record.date_range_end}")
    click.echo(
        f"  Imported: {record.transaction_count}, duplicates: {record.duplicate_count}, "
        f"errors: {record.error_count}"
    )

    click.echo(f"  Linked transactions: {service.linked_transaction_count(import_id)}")
    for txn in service.list_import_transactions(ctx.obj["user_id"], import_id):
        click.echo(f"    {txn.date}  {txn.type:<8} {txn.amount:>10,.2f}  {txn.description}")


@imports_group.command("delete")
@click.argument("import_id", type=int)
@click.option("--delete-transactions", is_flag=True, help="Also delete the imported transactions")
@click.option("--purge", is_flag=True, help="Remove the import record instead of marking it deleted")
@click.pass_context
def delete_import(ctx, import_id: int, delete_transactions: bool, purge: bool):
    """Delete an import; its transactions are kept unless asked otherwise."""
    service = CSVImportService(ctx.obj["db"])
    try:
        result = service.delete_import(
            ctx.obj["user_id"],
            import_id,
            delete_transactions=delete_transactions,
            purge=purge,
        )
    except NotFoundError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted import {import_id}")
    if delete_transactions:
        click.echo(f"  Deleted {result['deleted_transaction_count']} transactions")


def register_commands(cli):
    """Register import history commands with main CLI."""
    cli.add_command(imports_group, name="imports")
