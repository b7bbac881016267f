"""Bank file inspection command."""

from pathlib import Path

import click

from abafile.cli.error_handling import handle_domain_error
from abafile.domain.aba import parse_file
from abafile.domain.errors import FileFormatError
from abafile.utils.amount_parser import format_cents


@click.command("inspect")
@click.argument("aba_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def inspect_file(ctx, aba_file: str):
    """Read a Direct Entry file and check its totals."""
    try:
        parsed = parse_file(Path(aba_file).read_bytes())
    except FileFormatError as e:
        handle_domain_error(ctx, e)
        return

    header = parsed.header
    click.echo(f"Remitter:    {header.user_name} (APCA {header.apca_id})")
    click.echo(f"Description: {header.description}")
    click.echo(f"Process on:  {header.processing_date.isoformat()}")
    click.echo("-" * 90)
    for detail in parsed.details:
        click.echo(
            f"{detail.bsb} {detail.account_number:>9s} | {detail.account_name:32s} | "
            f"{format_cents(detail.amount):>14s} | {detail.lodgement_reference}"
        )
    click.echo("-" * 90)
    footer = parsed.footer
    click.echo(f"Records: {footer.record_count}  Credit: {format_cents(footer.credit_total)}  "
               f"Debit: {format_cents(footer.debit_total)}  Net: {format_cents(footer.net_total)}")

    problems = parsed.verify()
    if problems:
        for problem in problems:
            click.echo(f"Error: {problem}", err=True)
        ctx.exit(1)
    click.echo("File totals are consistent.")


def register_commands(cli):
    """Register inspect command with main CLI."""
    cli.add_command(inspect_file)
