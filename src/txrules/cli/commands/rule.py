"""Transaction rule management commands."""

import json

import click
from txrules.cli.error_handling import handle_domain_error
from txrules.cli.filter_input import build_action, build_filter
from txrules.domain.entities import TransactionRule
from txrules.domain.filter_tree import group_filter_to_dict, rule_action_to_dict
from txrules.domain.rule import RuleService
from txrules.domain.rule_application import RuleApplicationService

_filter_options = [
    click.option("--filter", "filter_json", help="Filter tree as JSON, or @file.json"),
    click.option(
        "--where",
        "conditions",
        nargs=3,
        multiple=True,
        metavar="FIELD OPERATOR VALUE",
        help="Condition such as: description contains coffee (repeatable)",
    ),
    click.option("--any", "match_any", is_flag=True, help="Match any --where condition instead of all"),
]

_action_options = [
    click.option("--category", help="Category to assign"),
    click.option("--notes", help="Notes to set"),
    click.option("--internal", type=click.Choice(["yes", "no"]), help="Set the internal transfer flag"),
]


def _with_options(options):
    def decorator(func):
        for option in reversed(options):
            func = option(func)
        return func

    return decorator


def _describe_action(rule: TransactionRule) -> str:
    parts = []
    if rule.action.category:
        parts.append(f"category={rule.action.category}")
    if rule.action.notes:
        parts.append(f"notes={rule.action.notes}")
    if rule.action.is_internal is not None:
        parts.append(f"internal={rule.action.is_internal}")
    return ", ".join(parts) or "(no action)"


@click.group("rule")
def rule_group():
    """Manage transaction rules."""
    pass


@rule_group.command("create")
@click.argument("title")
@_with_options(_filter_options)
@_with_options(_action_options)
@click.option("--order", type=int, help="Priority (lower runs first); defaults to last")
@click.pass_context
def create_rule(
    ctx,
    title: str,
    filter_json: str | None,
    conditions: tuple[tuple[str, str, str], ...],
    match_any: bool,
    category: str | None,
    notes: str | None,
    internal: str | None,
    order: int | None,
):
    """Create a transaction rule.

    Examples:
        txrules rule create Coffee --where description contains coffee --category "Eating Out"
        txrules rule create "Big debits" --filter @big_debits.json --notes "Check this"
    """
    db = ctx.obj["db"]
    service = RuleService(db)

    try:
        group = build_filter(filter_json, conditions, match_any)
        if group is None:
            click.echo("Error: Provide a filter with --filter or --where", err=True)
            ctx.exit(1)
        rule_id = service.create_rule(
            title=title,
            filter=group,
            action=build_action(category, notes, internal),
            order=order,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    rule = service.require_rule(rule_id)
    click.echo(f"Created rule '{rule.title}' (ID: {rule.id}, order: {rule.order})")


@rule_group.command("list")
@click.pass_context
def list_rules(ctx):
    """List rules in priority order."""
    db = ctx.obj["db"]
    service = RuleService(db)

    rules = service.list_rules()
    if not rules:
        click.echo("No transaction rules found.")
        return

    click.echo(f"{'ID':<6} {'Order':<6} {'Title':<30} Action")
    click.echo("-" * 80)
    for rule in rules:
        click.echo(f"{rule.id:<6} {rule.order:<6} {rule.title[:30]:<30} {_describe_action(rule)}")


@rule_group.command("show")
@click.argument("rule_id", type=int)
@click.pass_context
def show_rule(ctx, rule_id: int):
    """Show a rule with its filter tree as JSON."""
    db = ctx.obj["db"]
    service = RuleService(db)

    try:
        rule = service.require_rule(rule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Rule {rule.id}: {rule.title}")
    click.echo(f"  Order: {rule.order}")
    click.echo(f"  Action: {json.dumps(rule_action_to_dict(rule.action))}")
    click.echo("  Filter:")
    for line in json.dumps(group_filter_to_dict(rule.filter), indent=2).splitlines():
        click.echo(f"    {line}")


@rule_group.command("update")
@click.argument("rule_id", type=int)
@click.option("--title", help="New title")
@_with_options(_filter_options)
@_with_options(_action_options)
@click.option("--order", type=int, help="New priority")
@click.pass_context
def update_rule(
    ctx,
    rule_id: int,
    title: str | None,
    filter_json: str | None,
    conditions: tuple[tuple[str, str, str], ...],
    match_any: bool,
    category: str | None,
    notes: str | None,
    internal: str | None,
    order: int | None,
):
    """Update a rule.

    Action options replace the whole action when any of them is given.
    """
    db = ctx.obj["db"]
    service = RuleService(db)

    action = None
    if category is not None or notes is not None or internal is not None:
        action = build_action(category, notes, internal)

    try:
        service.update_rule(
            rule_id,
            title=title,
            filter=build_filter(filter_json, conditions, match_any),
            action=action,
            order=order,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated rule {rule_id}")


@rule_group.command("delete")
@click.argument("rule_id", type=int)
@click.pass_context
def delete_rule(ctx, rule_id: int):
    """Delete a rule."""
    db = ctx.obj["db"]
    service = RuleService(db)

    try:
        rule = service.delete_rule(rule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted rule '{rule.title}' (ID: {rule.id})")


@rule_group.command("reorder")
@click.argument("assignments", nargs=-1, required=True)
@click.pass_context
def reorder_rules(ctx, assignments: tuple[str, ...]):
    """Set rule priorities, given as RULE_ID=ORDER pairs.

    Example:
        txrules rule reorder 3=0 1=1 2=2
    """
    db = ctx.obj["db"]
    service = RuleService(db)

    orders: dict[int, int] = {}
    for assignment in assignments:
        rule_id, sep, order = assignment.partition("=")
        try:
            if not sep:
                raise ValueError
            orders[int(rule_id)] = int(order)
        except ValueError:
            click.echo(f"Error: Invalid assignment '{assignment}', expected RULE_ID=ORDER", err=True)
            ctx.exit(1)

    try:
        rules = service.reorder_rules(orders)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    for rule in rules:
        click.echo(f"{rule.order:<6} {rule.title} (ID: {rule.id})")


@rule_group.command("apply")
@click.argument("rule_id", type=int)
@click.pass_context
def apply_rule(ctx, rule_id: int):
    """Apply one rule to every transaction."""
    db = ctx.obj["db"]
    service = RuleApplicationService(db)

    try:
        result = service.apply_rule(rule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(result.message)
    click.echo(f"  Updated: {result.updated}")
    click.echo(f"  Skipped: {result.skipped}")
    for transaction_id, error in result.errors:
        click.echo(f"  ✗ Transaction {transaction_id}: {error}", err=True)


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group)
