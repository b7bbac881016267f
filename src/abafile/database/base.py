"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

from abafile.domain.entities import PaymentBatch, Provider


class Database(ABC):
    """Abstract database interface for abafile."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Provider operations
    @abstractmethod
    def create_provider(
        self,
        name: str,
        bsb: Optional[str] = None,
        account_number: Optional[str] = None,
        account_name: Optional[str] = None,
    ) -> int:
        """Create a new provider. Returns provider ID."""
        pass

    @abstractmethod
    def get_provider(self, provider_id: int) -> Optional[Provider]:
        """Get provider by ID."""
        pass

    @abstractmethod
    def get_provider_by_name(self, name: str) -> Optional[Provider]:
        """Get provider by name."""
        pass

    @abstractmethod
    def list_providers(self) -> list[Provider]:
        """List all providers."""
        pass

    @abstractmethod
    def update_provider_bank_details(
        self,
        provider_id: int,
        bsb: Optional[str],
        account_number: Optional[str],
        account_name: Optional[str],
    ) -> None:
        """Replace the bank details of a provider."""
        pass

    # Payment batch operations
    @abstractmethod
    def create_batch(self, batch_number: str) -> int:
        """Create a new, empty payment batch. Returns batch ID."""
        pass

    @abstractmethod
    def get_batch(self, batch_id: int) -> Optional[PaymentBatch]:
        """Get a batch snapshot with its items and payee bank profiles."""
        pass

    @abstractmethod
    def get_batch_by_number(self, batch_number: str) -> Optional[PaymentBatch]:
        """Get a batch snapshot by batch number."""
        pass

    @abstractmethod
    def list_batches(self) -> list[PaymentBatch]:
        """List all batches with their items."""
        pass

    @abstractmethod
    def add_payment_item(
        self,
        batch_id: int,
        provider_id: int,
        amount: int,
        reference: str = "",
    ) -> int:
        """Append an item to a batch. Amount is in cents. Returns item ID."""
        pass
