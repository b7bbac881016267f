"""CLI error handling helpers."""

import click

from abafile.domain.errors import DomainError
from abafile.logging_config import get_logger

logger = get_logger("cli")

# Errors a command reports as "Error: ..." instead of a traceback
CLI_ERRORS = (DomainError, ValueError, FileNotFoundError)


def handle_domain_error(ctx: click.Context, error: Exception) -> None:
    """Render an expected command failure and exit with status 1."""
    logger.debug("%s failed: %r", ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
