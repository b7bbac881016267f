"""Domain model entities for abafile.

These are pure data classes representing a payment batch snapshot,
independent of database schema. The bank file codec only ever sees these
values, fully resolved at call time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PayeeBankProfile:
    """Bank details of a payee as held by the provider record."""

    bsb: Optional[str]
    account_number: Optional[str]
    account_name: Optional[str]

    def missing_fields(self) -> list[str]:
        """Return the names of fields that are absent or blank."""
        return [
            name
            for name in ("bsb", "account_number", "account_name")
            if not (getattr(self, name) or "").strip()
        ]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()


@dataclass(frozen=True)
class PaymentItem:
    """A single amount owed to one payee within a batch."""

    id: int
    batch_id: int
    payee_id: int
    payee_name: str
    amount: int  # cents
    reference: str = ""
    bank_profile: Optional[PayeeBankProfile] = None


@dataclass(frozen=True)
class PaymentBatch:
    """Payment batch snapshot. Item order is the emission order in the file."""

    id: int
    batch_number: str
    items: tuple[PaymentItem, ...] = ()
    created_at: Optional[datetime] = None

    @property
    def total_amount(self) -> int:
        """Sum of all item amounts in cents (informational only)."""
        return sum(item.amount for item in self.items)


@dataclass(frozen=True)
class Originator:
    """Bank identity of the organisation remitting the payments."""

    bsb: str
    account_number: str
    name: str
    apca_id: str = "000000"
    financial_institution: Optional[str] = None


@dataclass(frozen=True)
class Provider:
    """Provider (payee) domain entity."""

    id: int
    name: str
    bank_profile: PayeeBankProfile
    created_at: datetime


@dataclass(frozen=True)
class GeneratedFile:
    """Direct Entry file content produced by the codec.

    ``lines`` holds the header, the detail records and the footer, each
    exactly 120 characters, without line terminators.
    """

    lines: tuple[str, ...]
    credit_total: int
    record_count: int
    debit_total: int = 0
    line_terminator: str = "\r\n"
    excluded: tuple[PaymentItem, ...] = field(default=(), compare=False)

    @property
    def net_total(self) -> int:
        return self.credit_total - self.debit_total

    @property
    def header(self) -> str:
        return self.lines[0]

    @property
    def details(self) -> tuple[str, ...]:
        return self.lines[1:-1]

    @property
    def footer(self) -> str:
        return self.lines[-1]

    def to_text(self) -> str:
        return "".join(line + self.line_terminator for line in self.lines)

    def to_bytes(self) -> bytes:
        return self.to_text().encode("ascii")
