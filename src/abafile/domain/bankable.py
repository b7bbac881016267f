"""Selection of payment items that can be paid by Direct Entry."""

from typing import Iterable, Optional

from abafile.domain.entities import PayeeBankProfile, PaymentItem
from abafile.logging_config import get_logger

logger = get_logger("bankable")


def is_complete(profile: Optional[PayeeBankProfile]) -> bool:
    """Return True if the profile has a BSB, account number and account name."""
    return profile is not None and profile.is_complete


def filter_bankable(items: Iterable[PaymentItem]) -> list[PaymentItem]:
    """Return the items whose payee has a complete bank profile.

    Batch order is preserved. Items without complete bank details are left
    out of the file rather than treated as errors.
    """
    bankable = []
    for item in items:
        if is_complete(item.bank_profile):
            bankable.append(item)
            continue

        missing = (
            item.bank_profile.missing_fields()
            if item.bank_profile is not None
            else ["bank profile"]
        )
        logger.info(
            "Excluding payment item %s for '%s': missing %s",
            item.id,
            item.payee_name,
            ", ".join(missing),
        )
    return bankable
