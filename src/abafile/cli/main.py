"""Main CLI entry point."""

import logging

import click

from abafile.logging_config import configure_logging

# Import and register all commands at module level
from abafile.cli.commands import (
    provider,
    batch,
    generate,
    inspect_cmd,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides ABAFILE_DB_PATH environment variable)",
    envvar="ABAFILE_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log excluded items and generation details")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """abafile - Direct Entry (ABA) payment files for provider batches.

    Record providers and their bank details, collect payments into
    batches, and generate the bank file that pays them.
    """
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db_path
    configure_logging(level=logging.INFO if verbose else logging.WARNING)

    @ctx.call_on_close
    def _close_db():
        db = ctx.obj.get("db")
        if db is not None:
            db.disconnect()


# Register all commands
provider.register_commands(cli)
batch.register_commands(cli)
generate.register_commands(cli)
inspect_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
