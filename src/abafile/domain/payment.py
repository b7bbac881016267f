"""Payment batch domain service."""

from datetime import date
from typing import Optional

from abafile.database.base import Database
from abafile.domain.aba import DirectEntryFileCodec
from abafile.domain.entities import (
    GeneratedFile,
    Originator,
    PaymentBatch as PaymentBatchEntity,
    Provider as ProviderEntity,
)
from abafile.domain.errors import (
    ConflictError,
    InvalidAmountError,
    NotFoundError,
    ValidationError,
    batch_not_found,
    non_positive_amount,
    provider_not_found,
)
from abafile.domain.fields import digits, format_bsb, numeric
from abafile.logging_config import get_logger

logger = get_logger("payment")


def _check_amount(amount: int, provider_name: str) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(non_positive_amount(amount, provider_name))
    # Reject anything the file's amount column cannot hold before it is stored
    numeric(amount, 10, f"amount for '{provider_name}'")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class PaymentService:
    """Service for loading payment batches and generating their bank files."""

    def __init__(self, db: Database, codec: Optional[DirectEntryFileCodec] = None):
        """Initialize payment service.

        Args:
            db: Database instance
            codec: Codec used by generate_file (defaults to CRLF, mixed case)
        """
        self.db = db
        self.codec = codec or DirectEntryFileCodec()

    # Providers
    def create_provider(
        self,
        name: str,
        bsb: Optional[str] = None,
        account_number: Optional[str] = None,
        account_name: Optional[str] = None,
    ) -> int:
        """Create a new provider, with or without bank details.

        Args:
            name: Provider name
            bsb: BSB, stored in canonical DDD-DDD form
            account_number: Account number, up to 9 digits
            account_name: Account name as known to the bank

        Returns:
            Provider ID

        Raises:
            ConflictError: If a provider with the same name exists
            ValidationError: If the name is blank or bank details are malformed
            FieldOverflowError: If the BSB or account number is too long
        """
        name = name.strip()
        if not name:
            raise ValidationError("Provider name is required")
        if self.db.get_provider_by_name(name) is not None:
            raise ConflictError(f"Provider with name '{name}' already exists")

        bsb, account_number, account_name = self._clean_bank_details(
            bsb, account_number, account_name
        )
        return self.db.create_provider(
            name=name, bsb=bsb, account_number=account_number, account_name=account_name
        )

    def get_provider(self, name: str) -> ProviderEntity:
        """Get provider by name.

        Raises:
            NotFoundError: If provider does not exist
        """
        provider = self.db.get_provider_by_name(name)
        if provider is None:
            raise NotFoundError(provider_not_found(name))
        return provider

    def list_providers(self) -> list[ProviderEntity]:
        """List all providers."""
        return self.db.list_providers()

    def update_bank_details(
        self,
        name: str,
        bsb: Optional[str],
        account_number: Optional[str],
        account_name: Optional[str],
    ) -> None:
        """Replace a provider's bank details. Blank values clear a field.

        Raises:
            NotFoundError: If provider does not exist
            ValidationError: If bank details are malformed
        """
        provider = self.get_provider(name)
        bsb, account_number, account_name = self._clean_bank_details(
            bsb, account_number, account_name
        )
        self.db.update_provider_bank_details(
            provider.id, bsb=bsb, account_number=account_number, account_name=account_name
        )

    @staticmethod
    def _clean_bank_details(
        bsb: Optional[str], account_number: Optional[str], account_name: Optional[str]
    ) -> tuple[Optional[str], Optional[str], Optional[str]]:
        bsb = _blank_to_none(bsb)
        account_number = _blank_to_none(account_number)
        if bsb is not None:
            bsb = format_bsb(bsb)
        if account_number is not None:
            # Validate only; the stored value keeps the provider's own formatting
            digits(account_number, 9, "account number")
        return bsb, account_number, _blank_to_none(account_name)

    # Batches
    def create_batch(self, batch_number: str) -> int:
        """Create a new payment batch.

        Raises:
            ConflictError: If the batch number is already used
            ValidationError: If the batch number is blank
        """
        batch_number = batch_number.strip()
        if not batch_number:
            raise ValidationError("Batch number is required")
        if self.db.get_batch_by_number(batch_number) is not None:
            raise ConflictError(f"Payment batch '{batch_number}' already exists")
        return self.db.create_batch(batch_number)

    def add_item(
        self, batch_number: str, provider_name: str, amount: int, reference: str = ""
    ) -> int:
        """Append a payment to a batch.

        Args:
            batch_number: Batch to add to
            provider_name: Payee provider name
            amount: Amount in cents
            reference: Invoice reference, used as lodgement reference

        Returns:
            Payment item ID

        Raises:
            NotFoundError: If batch or provider does not exist
            InvalidAmountError: If amount is not a positive number of cents
            FieldOverflowError: If amount does not fit the 10-digit amount column
        """
        _check_amount(amount, provider_name)

        batch = self.db.get_batch_by_number(batch_number)
        if batch is None:
            raise NotFoundError(batch_not_found(batch_number))
        return self._append_item(batch.id, provider_name, amount, reference)

    def add_item_to(
        self, batch_id: int, provider_name: str, amount: int, reference: str = ""
    ) -> int:
        """Append a payment to an already resolved batch.

        Same checks as :meth:`add_item` without reloading the batch.
        """
        _check_amount(amount, provider_name)
        return self._append_item(batch_id, provider_name, amount, reference)

    def _append_item(
        self, batch_id: int, provider_name: str, amount: int, reference: str
    ) -> int:
        provider = self.get_provider(provider_name)
        return self.db.add_payment_item(
            batch_id=batch_id, provider_id=provider.id, amount=amount, reference=reference.strip()
        )

    def get_snapshot(self, batch_number: str) -> PaymentBatchEntity:
        """Load a batch with its items and current payee bank details.

        Raises:
            NotFoundError: If batch does not exist
        """
        batch = self.db.get_batch_by_number(batch_number)
        if batch is None:
            raise NotFoundError(batch_not_found(batch_number))
        return batch

    def list_batches(self) -> list[PaymentBatchEntity]:
        """List all batches."""
        return self.db.list_batches()

    def generate_file(
        self,
        batch_number: str,
        originator: Originator,
        description: str,
        processing_date: Optional[date] = None,
    ) -> GeneratedFile:
        """Generate the Direct Entry file for a stored batch.

        The snapshot is loaded fresh on every call, so regenerating picks up
        bank detail changes made since the last run.

        Raises:
            NotFoundError: If batch does not exist
            ValidationError: If the batch or originator details are invalid
            FieldOverflowError: If a numeric value does not fit its column
        """
        batch = self.get_snapshot(batch_number)
        generated = self.codec.build_for(
            batch, originator, description, processing_date or date.today()
        )
        if generated.excluded:
            logger.warning(
                "Batch %s: %d item(s) without complete bank details were left out",
                batch_number,
                len(generated.excluded),
            )
        return generated
