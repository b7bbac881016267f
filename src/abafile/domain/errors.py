"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Payment amount is not a positive whole number of cents."""


class FileFormatError(ValidationError):
    """Direct Entry file content could not be read."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class FieldOverflowError(DomainError):
    """A numeric value needs more digits than its fixed-width column holds.

    Numeric columns carry money, account numbers and counts, so they are
    never truncated.
    """

    def __init__(self, field: str, value: object, width: int):
        self.field = field
        self.value = value
        self.width = width
        super().__init__(field_overflow(field, value, width))


def field_overflow(field: str, value: object, width: int) -> str:
    """Return message for a numeric field that does not fit its column."""
    return f"Value {value!r} for {field} does not fit in {width} digits"


def provider_not_found(name: str) -> str:
    """Return message for missing provider."""
    return f"Provider '{name}' not found"


def batch_not_found(batch_number: str) -> str:
    """Return message for missing payment batch."""
    return f"Payment batch '{batch_number}' not found"


def non_positive_amount(amount: object, payee_name: str | None = None) -> str:
    """Return message for a payment amount that is zero or negative."""
    if payee_name:
        return f"Payment to '{payee_name}' has invalid amount {amount!r}: must be a positive number of cents"
    return f"Invalid amount {amount!r}: must be a positive number of cents"
