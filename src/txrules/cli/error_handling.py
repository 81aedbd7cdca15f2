"""Reporting of rule, filter and transaction errors from txrules commands."""

import logging

import click

from txrules.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` on stderr and exit with status 1.

    Invalid filter trees, unknown rule or transaction IDs and failed
    validation all end up here.
    """
    logger.debug("%s failed: %r", ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
