"""Rule-based classification command."""

import click
from ledgerline.domain.classification import ClassificationService


@click.command("classify")
@click.pass_context
def classify(ctx):
    """Apply active rules to every uncategorized transaction."""
    service = ClassificationService(ctx.obj["db"])
    result = service.apply_rules(ctx.obj["user_id"])
    if result.rules == 0:
        click.echo("No active rules. Add one with 'rule add'.")
        return
    click.echo(f"Classified {result.classified} transactions using {result.rules} rules")


def register_commands(cli):
    """Register classify command with main CLI."""
    cli.add_command(classify)
