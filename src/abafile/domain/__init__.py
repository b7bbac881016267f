"""Domain layer for abafile.

Services backed by the database (``abafile.domain.payment`` and
``abafile.domain.csv_import``) are imported from their modules directly.
"""

from abafile.domain.aba import DirectEntryFileCodec, ParsedFile, parse_file
from abafile.domain.bankable import filter_bankable, is_complete
from abafile.domain.entities import (
    GeneratedFile,
    Originator,
    PayeeBankProfile,
    PaymentBatch,
    PaymentItem,
)

__all__ = [
    "DirectEntryFileCodec",
    "ParsedFile",
    "parse_file",
    "filter_bankable",
    "is_complete",
    "GeneratedFile",
    "Originator",
    "PayeeBankProfile",
    "PaymentBatch",
    "PaymentItem",
]
