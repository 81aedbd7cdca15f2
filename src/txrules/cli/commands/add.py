"""Add transaction command."""

import click
from txrules.cli.error_handling import handle_domain_error
from txrules.domain.transaction import TransactionService
from txrules.utils.date_parser import parse_date
from txrules.utils.amount_parser import parse_amount, split_signed_amount


@click.command("add")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD, DD/MM/YYYY or relative like 'today', 'yesterday')",
)
@click.option(
    "--amount", required=True, help="Transaction amount (e.g., 123.45; negative means debit)"
)
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["credit", "debit"]),
    help="Transaction type (defaults to the sign of the amount)",
)
@click.option("--bank-account", required=True, help="Bank account name")
@click.option("--category", help="Category name")
@click.option("--notes", help="Notes")
@click.option("--internal", is_flag=True, help="Mark as an internal transfer")
@click.pass_context
def add_transaction(
    ctx,
    date: str,
    amount: str,
    description: str,
    txn_type: str | None,
    bank_account: str,
    category: str | None,
    notes: str | None,
    internal: bool,
):
    """Add a transaction manually.

    Examples:
        txrules add --date 2024-01-15 --amount -50.00 --description "Grocery store" --bank-account Checking
        txrules add --date today --amount 1000 --type credit --description Salary --bank-account Checking
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    # Parse date
    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if txn_type is None:
        txn_amount, signed_type = split_signed_amount(txn_amount)
        txn_type = signed_type.value
    else:
        txn_amount = abs(txn_amount)

    try:
        transaction_id = service.create_transaction(
            date=txn_date,
            amount=txn_amount,
            description=description,
            type=txn_type,
            bank_account=bank_account,
            category=category,
            notes=notes,
            is_internal=internal,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date:%Y-%m-%d}")
    click.echo(f"  Amount: {txn_amount:,.2f} ({txn_type})")
    click.echo(f"  Description: {description}")
    click.echo(f"  Bank account: {bank_account}")
    if category:
        click.echo(f"  Category: {category}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
