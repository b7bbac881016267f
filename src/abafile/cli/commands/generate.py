"""Bank file generation command."""

from pathlib import Path

import click

from abafile.cli.context import get_db
from abafile.cli.error_handling import CLI_ERRORS, handle_domain_error
from abafile.domain.aba import DirectEntryFileCodec
from abafile.domain.entities import Originator
from abafile.domain.payment import PaymentService
from abafile.utils.amount_parser import format_cents
from abafile.utils.date_parser import parse_processing_date


@click.command("generate")
@click.argument("batch_number")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file (defaults to BATCH_NUMBER.aba)",
)
@click.option("--bsb", envvar="ABAFILE_BSB", required=True, help="Remitter's BSB")
@click.option(
    "--account-number", envvar="ABAFILE_ACCOUNT_NUMBER", required=True, help="Remitter's account number"
)
@click.option("--account-name", envvar="ABAFILE_ACCOUNT_NAME", required=True, help="Remitter's name")
@click.option(
    "--apca-id", envvar="ABAFILE_APCA_ID", default="000000", show_default=True, help="APCA user id"
)
@click.option("--fi", "financial_institution", envvar="ABAFILE_FI", help="Bank mnemonic, e.g. CBA")
@click.option("--description", default="PAYMENTS", show_default=True, help="Description of entries")
@click.option("--date", "date_str", default="today", show_default=True, help="Processing date")
@click.option("--uppercase", is_flag=True, help="Upper-case names and references")
@click.option("--lf", "unix_newlines", is_flag=True, help="Use LF line endings instead of CRLF")
@click.pass_context
def generate_file(
    ctx,
    batch_number: str,
    output: str | None,
    bsb: str,
    account_number: str,
    account_name: str,
    apca_id: str,
    financial_institution: str | None,
    description: str,
    date_str: str,
    uppercase: bool,
    unix_newlines: bool,
):
    """Generate the Direct Entry (ABA) file for a batch.

    Remitter details can be supplied through ABAFILE_BSB,
    ABAFILE_ACCOUNT_NUMBER, ABAFILE_ACCOUNT_NAME, ABAFILE_APCA_ID and
    ABAFILE_FI instead of options.

    Examples:
        abafile generate PAY-001 --bsb 032-000 --account-number 123456 --account-name "OCTO PLAN MGMT"
    """
    codec = DirectEntryFileCodec(
        line_terminator="\n" if unix_newlines else "\r\n", uppercase=uppercase
    )
    service = PaymentService(get_db(ctx), codec)
    originator = Originator(
        bsb=bsb,
        account_number=account_number,
        name=account_name,
        apca_id=apca_id,
        financial_institution=financial_institution,
    )

    try:
        processing_date = parse_processing_date(date_str)
        generated = service.generate_file(batch_number, originator, description, processing_date)
    except CLI_ERRORS as e:
        handle_domain_error(ctx, e)
        return

    # The file is only written once every record has been built
    output_path = Path(output or f"{batch_number}.aba")
    output_path.write_bytes(generated.to_bytes())

    click.echo(
        f"Wrote {output_path}: {generated.record_count} payment(s), "
        f"total {format_cents(generated.credit_total)}"
    )
    for item in generated.excluded:
        click.echo(
            f"  Skipped {item.payee_name} ({format_cents(item.amount)}): incomplete bank details",
            err=True,
        )


def register_commands(cli):
    """Register generate command with main CLI."""
    cli.add_command(generate_file)
