"""CSV import command."""

import click
from txrules.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--bank-account", help="Bank account for rows without a bank account column")
@click.option("--no-rules", is_flag=True, help="Do not auto-categorize with transaction rules")
@click.pass_context
def import_csv(ctx, csv_file: str, bank_account: str | None, no_rules: bool):
    """Import transactions from a CSV file.

    The file needs Date, Description and Amount columns; Type, Bank Account,
    Category and Notes are optional. Matching rules are applied on import.
    """
    db = ctx.obj["db"]
    service = CSVImportService(db)

    try:
        result = service.import_csv(
            csv_file_path=csv_file, bank_account=bank_account, apply_rules=not no_rules
        )
        click.echo("\nImport complete:")
        click.echo(f"  Imported: {result['imported']} transactions")
        click.echo(f"  Categorized by rules: {result['categorized']}")
        if result["errors"]:
            click.echo(f"  Errors: {len(result['errors'])}")
            for error in result["errors"]:
                click.echo(f"    {error}", err=True)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
