"""Payment batch commands."""

import click

from abafile.cli.context import get_db
from abafile.cli.error_handling import CLI_ERRORS, handle_domain_error
from abafile.domain.bankable import is_complete
from abafile.domain.csv_import import BatchImportService
from abafile.domain.errors import DomainError
from abafile.domain.payment import PaymentService
from abafile.utils.amount_parser import format_cents, parse_amount_cents


@click.group("batch")
def batch_group():
    """Manage payment batches."""
    pass


@batch_group.command("create")
@click.argument("batch_number")
@click.pass_context
def create_batch(ctx, batch_number: str):
    """Create an empty payment batch."""
    service = PaymentService(get_db(ctx))

    try:
        batch_id = service.create_batch(batch_number)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created batch '{batch_number.strip()}' (ID: {batch_id})")


@batch_group.command("add")
@click.argument("batch_number")
@click.argument("provider_name", metavar="PROVIDER_NAME")
@click.argument("amount")
@click.option("--reference", default="", help="Invoice reference shown on the payee's statement")
@click.pass_context
def add_item(ctx, batch_number: str, provider_name: str, amount: str, reference: str):
    """Add a payment to a batch. AMOUNT is in dollars, e.g. 2500.00.

    Examples:
        abafile batch add PAY-001 "Therapy Solutions" 2500.00 --reference INV-1001
    """
    service = PaymentService(get_db(ctx))

    try:
        cents = parse_amount_cents(amount)
        service.add_item(batch_number, provider_name, cents, reference)
    except CLI_ERRORS as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Added {format_cents(cents)} to '{provider_name}' in batch '{batch_number}'")


@batch_group.command("import")
@click.argument("batch_number")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_items(ctx, batch_number: str, csv_file: str):
    """Import payments from a CSV file with provider, amount and reference columns."""
    service = BatchImportService(get_db(ctx))

    try:
        result = service.import_csv(csv_file_path=csv_file, batch_number=batch_number)
    except CLI_ERRORS as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} payments")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


@batch_group.command("show")
@click.argument("batch_number")
@click.pass_context
def show_batch(ctx, batch_number: str):
    """Show the payments in a batch and whether each can be paid by bank file."""
    service = PaymentService(get_db(ctx))

    try:
        batch = service.get_snapshot(batch_number)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nBatch {batch.batch_number}")
    click.echo("-" * 90)
    if not batch.items:
        click.echo("No payments in this batch.")
        return

    bankable_total = 0
    for item in batch.items:
        bankable = is_complete(item.bank_profile)
        if bankable:
            bankable_total += item.amount
        status = "ok" if bankable else "NO BANK DETAILS"
        click.echo(
            f"{item.id:4d} | {item.payee_name:25s} | {format_cents(item.amount):>14s} | "
            f"{item.reference[:20]:20s} | {status}"
        )
    click.echo("-" * 90)
    click.echo(f"Batch total:    {format_cents(batch.total_amount)}")
    click.echo(f"Payable by file: {format_cents(bankable_total)}")


@batch_group.command("list")
@click.pass_context
def list_batches(ctx):
    """List all batches."""
    service = PaymentService(get_db(ctx))

    batches = service.list_batches()
    if not batches:
        click.echo("No batches found.")
        return

    for batch in batches:
        click.echo(
            f"{batch.batch_number:20s} | {len(batch.items):4d} payment(s) | {format_cents(batch.total_amount)}"
        )


def register_commands(cli):
    """Register batch commands with main CLI."""
    cli.add_command(batch_group)
