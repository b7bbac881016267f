"""Mapper functions to convert SQLAlchemy models into domain snapshots.

Bank details are copied out of the provider row at load time, so the
resulting batch is a self-contained value that the codec can read without
touching the session.
"""

from abafile.domain import entities as domain
from abafile.database.models import (
    Provider as ORMProvider,
    PaymentBatch as ORMPaymentBatch,
    PaymentItem as ORMPaymentItem,
)


def bank_profile_to_domain(orm_provider: ORMProvider) -> domain.PayeeBankProfile:
    """Extract the bank profile of a SQLAlchemy Provider."""
    return domain.PayeeBankProfile(
        bsb=orm_provider.bsb,
        account_number=orm_provider.account_number,
        account_name=orm_provider.account_name,
    )


def provider_to_domain(orm_provider: ORMProvider) -> domain.Provider:
    """Convert SQLAlchemy Provider model to domain Provider entity."""
    return domain.Provider(
        id=orm_provider.id,
        name=orm_provider.name,
        bank_profile=bank_profile_to_domain(orm_provider),
        created_at=orm_provider.created_at,
    )


def payment_item_to_domain(orm_item: ORMPaymentItem) -> domain.PaymentItem:
    """Convert SQLAlchemy PaymentItem model to domain PaymentItem with its bank profile."""
    return domain.PaymentItem(
        id=orm_item.id,
        batch_id=orm_item.batch_id,
        payee_id=orm_item.provider_id,
        payee_name=orm_item.provider_name,
        amount=orm_item.amount,
        reference=orm_item.reference or "",
        bank_profile=(
            bank_profile_to_domain(orm_item.provider) if orm_item.provider is not None else None
        ),
    )


def payment_batch_to_domain(orm_batch: ORMPaymentBatch) -> domain.PaymentBatch:
    """Convert SQLAlchemy PaymentBatch model and its items to a domain snapshot."""
    return domain.PaymentBatch(
        id=orm_batch.id,
        batch_number=orm_batch.batch_number,
        items=tuple(payment_item_to_domain(item) for item in orm_batch.items),
        created_at=orm_batch.created_at,
    )
