"""Classification rule commands."""

import json

import click
from ledgerline.cli.error_handling import handle_domain_error
from ledgerline.domain.errors import DomainError
from ledgerline.domain.rules import RuleService


@click.group()
def rule_group():
    """Manage keyword classification rules."""
    pass


@rule_group.command("add")
@click.argument("pattern")
@click.argument("category")
@click.option("--priority", type=int, default=0, show_default=True, help="Higher runs first")
@click.option("--inactive", is_flag=True, help="Create the rule disabled")
@click.pass_context
def add_rule(ctx, pattern: str, category: str, priority: int, inactive: bool):
    """Add a rule: comma-separated keywords mapped to CATEGORY."""
    service = RuleService(ctx.obj["db"])
    try:
        rule_id = service.create_rule(
            ctx.obj["user_id"],
            pattern=pattern,
            category=category,
            priority=priority,
            is_active=not inactive,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created rule {rule_id}: '{pattern}' -> {category}")


@rule_group.command("list")
@click.option("--active-only", is_flag=True)
@click.option("--json", "as_json", is_flag=True, help="Print rules as JSON")
@click.pass_context
def list_rules(ctx, active_only: bool, as_json: bool):
    """List rules in the order they are tried."""
    service = RuleService(ctx.obj["db"])
    rules = service.list_rules(ctx.obj["user_id"], active_only=active_only)
    if as_json:
        click.echo(json.dumps([{"id": r.id, **r.to_dict()} for r in rules], indent=2))
        return
    if not rules:
        click.echo("No rules found.")
        return

    click.echo(f"\n{'ID':<6} {'Priority':>8}  {'Active':<7} {'Category':<20} Pattern")
    click.echo("-" * 80)
    for r in rules:
        active = "yes" if r.is_active else "no"
        click.echo(f"{r.id:<6} {r.priority:>8}  {active:<7} {r.category:<20} {r.pattern}")


def _set_active(ctx, rule_id: int, is_active: bool) -> None:
    service = RuleService(ctx.obj["db"])
    try:
        service.set_active(ctx.obj["user_id"], rule_id, is_active)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Rule {rule_id} {'enabled' if is_active else 'disabled'}")


@rule_group.command("enable")
@click.argument("rule_id", type=int)
@click.pass_context
def enable_rule(ctx, rule_id: int):
    """Enable a rule."""
    _set_active(ctx, rule_id, True)


@rule_group.command("disable")
@click.argument("rule_id", type=int)
@click.pass_context
def disable_rule(ctx, rule_id: int):
    """Disable a rule."""
    _set_active(ctx, rule_id, False)


@rule_group.command("delete")
@click.argument("rule_id", type=int)
@click.pass_context
def delete_rule(ctx, rule_id: int):
    """Delete a rule."""
    service = RuleService(ctx.obj["db"])
    try:
        service.delete_rule(ctx.obj["user_id"], rule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted rule {rule_id}")


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group, name="rule")
