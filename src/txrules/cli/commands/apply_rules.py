"""Apply rules to selected transactions."""

import click
from txrules.cli.error_handling import handle_domain_error
from txrules.domain.rule_application import RuleApplicationService


@click.command("apply-rules")
@click.argument("transaction_ids", nargs=-1, required=True, type=int)
@click.option("--preview", is_flag=True, help="Only count matches, do not change anything")
@click.pass_context
def apply_rules(ctx, transaction_ids: tuple[int, ...], preview: bool):
    """Apply rules in priority order to one or more transactions.

    Each transaction gets the action of the first rule that matches it.

    Examples:
        txrules apply-rules 1 2 3
        txrules apply-rules 1 2 3 --preview
    """
    db = ctx.obj["db"]
    service = RuleApplicationService(db)

    # Remove duplicates while preserving order
    unique_ids = list(dict.fromkeys(transaction_ids))

    try:
        result = service.apply_rules(unique_ids, preview=preview)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(result.message)
    click.echo(f"  {'Would update' if preview else 'Updated'}: {result.updated}")
    click.echo(f"  Skipped: {result.skipped}")
    if result.rule_breakdown:
        click.echo("  By rule:")
        for entry in result.rule_breakdown:
            click.echo(f"    {entry.rule_title}: {entry.count}")
    for transaction_id, error in result.errors:
        click.echo(f"  ✗ Transaction {transaction_id}: {error}", err=True)
    if result.errors:
        ctx.exit(1)


def register_commands(cli):
    """Register apply-rules command with main CLI."""
    cli.add_command(apply_rules)
