"""Transaction viewing commands."""

import click
from txrules.domain.transaction import TransactionService


@click.command("view")
@click.option("--category", help="Category name (empty string for uncategorized)")
@click.option("--bank-account", help="Bank account name")
@click.option("--verbose", "-v", is_flag=True, help="Show all fields including notes and the internal flag")
@click.pass_context
def view_transactions(ctx, category: str | None, bank_account: str | None, verbose: bool):
    """View transactions with optional filters."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    transactions = service.list_transactions(category=category, bank_account=bank_account)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")

    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date}")
            click.echo(f"  Amount: {txn.amount:,.2f} ({txn.type})")
            click.echo(f"  Bank account: {txn.bank_account}")
            click.echo(f"  Category: {txn.category or 'Uncategorized'}")
            click.echo(f"  Description: {txn.description}")
            if txn.notes:
                click.echo(f"  Notes: {txn.notes}")
            click.echo(f"  Internal: {'yes' if txn.is_internal else 'no'}")
            click.echo("-" * 100)
        return

    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>12} {'Type':<7} {'Account':<16} {'Category':<18} {'Description':<25}"
    )
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {txn.date:%Y-%m-%d}   {txn.amount:>12,.2f} {txn.type:<7} "
            f"{txn.bank_account[:16]:<16} {(txn.category or '')[:18]:<18} {txn.description[:25]:<25}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
