"""Main CLI entry point."""

import logging

import click
from txrules.database.factories import create_sqlite_database

# Import and register all commands at module level
from txrules.cli.commands import (
    add,
    view,
    import_cmd,
    rule,
    apply_rules,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TXRULES_DB_PATH environment variable)",
    envvar="TXRULES_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="TXRULES_LOG_LEVEL",
    help="Logging level for diagnostic output on stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """txrules - Transaction tracking with rule-based categorization.

    Import transactions from CSV files and categorize them automatically
    with ordered rules built from AND/OR filter groups.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
add.register_commands(cli)
view.register_commands(cli)
import_cmd.register_commands(cli)
rule.register_commands(cli)
apply_rules.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
