"""Provider management commands."""

import click

from abafile.cli.context import get_db
from abafile.cli.error_handling import handle_domain_error
from abafile.domain.errors import DomainError
from abafile.domain.payment import PaymentService


@click.group("provider")
def provider_group():
    """Manage providers and their bank details."""
    pass


@provider_group.command("add")
@click.argument("name", metavar="PROVIDER_NAME")
@click.option("--bsb", help="BSB, e.g. 032-001")
@click.option("--account-number", help="Account number (up to 9 digits)")
@click.option("--account-name", help="Account name as held by the bank")
@click.pass_context
def add_provider(
    ctx, name: str, bsb: str | None, account_number: str | None, account_name: str | None
):
    """Add a provider.

    Bank details are optional; payments to a provider without a BSB,
    account number and account name are left out of generated files.

    Examples:
        abafile provider add "Therapy Solutions" --bsb 032-001 --account-number 123456789 --account-name "THERAPY SOLUTIONS"
        abafile provider add "Care Plus"
    """
    service = PaymentService(get_db(ctx))

    try:
        provider_id = service.create_provider(
            name=name, bsb=bsb, account_number=account_number, account_name=account_name
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created provider '{name.strip()}' (ID: {provider_id})")
    missing = service.get_provider(name.strip()).bank_profile.missing_fields()
    if missing:
        click.echo(
            f"Bank details incomplete (missing {', '.join(missing)}): "
            "payments to this provider will not be included in bank files"
        )


@provider_group.command("list")
@click.pass_context
def list_providers(ctx):
    """List all providers."""
    service = PaymentService(get_db(ctx))

    providers = service.list_providers()
    if not providers:
        click.echo("No providers found.")
        return

    click.echo("\nProviders:")
    click.echo("-" * 90)
    for p in providers:
        profile = p.bank_profile
        if profile.is_complete:
            bank = f"{profile.bsb} {profile.account_number} ({profile.account_name})"
        else:
            bank = f"incomplete (missing {', '.join(profile.missing_fields())})"
        click.echo(f"ID: {p.id:3d} | {p.name:25s} | Bank: {bank}")


@provider_group.command("bank")
@click.argument("name", metavar="PROVIDER_NAME")
@click.option("--bsb", help="BSB, e.g. 032-001")
@click.option("--account-number", help="Account number (up to 9 digits)")
@click.option("--account-name", help="Account name as held by the bank")
@click.pass_context
def set_bank_details(
    ctx, name: str, bsb: str | None, account_number: str | None, account_name: str | None
):
    """Replace a provider's bank details.

    Omitted options clear the corresponding field.
    """
    service = PaymentService(get_db(ctx))

    try:
        service.update_bank_details(
            name, bsb=bsb, account_number=account_number, account_name=account_name
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated bank details for '{name}'")


def register_commands(cli):
    """Register provider commands with main CLI."""
    cli.add_command(provider_group)
