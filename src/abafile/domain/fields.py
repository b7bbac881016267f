"""Fixed-width field rendering for Direct Entry records.

Numeric fields are right-aligned and zero-padded and raise
``FieldOverflowError`` rather than lose digits. Text fields are
left-aligned, space-padded and truncated.
"""

import re
import unicodedata
from typing import Optional

from abafile.domain.errors import FieldOverflowError, ValidationError
from abafile.logging_config import get_logger

logger = get_logger("fields")

_SEPARATORS = re.compile(r"[ -]")

BSB_DIGITS = 6


def _strip_separators(value: Optional[str], field: str) -> str:
    cleaned = _SEPARATORS.sub("", (value or "").strip())
    if cleaned and not (cleaned.isascii() and cleaned.isdigit()):
        raise ValidationError(f"{field} {value!r} may only contain digits, spaces and dashes")
    return cleaned


def numeric(value: int, width: int, field: str = "value") -> str:
    """Render a non-negative integer zero-padded to ``width`` characters.

    Args:
        value: Integer to render
        width: Column width
        field: Field name used in error messages

    Returns:
        Zero-padded string of exactly ``width`` characters

    Raises:
        ValidationError: If value is not a non-negative integer
        FieldOverflowError: If value has more digits than ``width``
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be a whole number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{field} cannot be negative: {value}")

    rendered = str(value)
    if len(rendered) > width:
        raise FieldOverflowError(field, value, width)
    return rendered.rjust(width, "0")


def text(value: Optional[str], width: int) -> str:
    """Render text left-aligned, space-padded and truncated to ``width``."""
    return (value or "")[:width].ljust(width)


def digits(value: Optional[str], width: int, field: str = "value") -> str:
    """Render the digits of ``value`` zero-padded to ``width``.

    Spaces and dashes are dropped; leading zeros in the input are kept.

    Raises:
        ValidationError: If value contains no digits or any character other
            than digits, spaces and dashes
        FieldOverflowError: If more than ``width`` digits remain
    """
    cleaned = _strip_separators(value, field)
    if not cleaned:
        raise ValidationError(f"{field} must contain digits, got {value!r}")
    if len(cleaned) > width:
        raise FieldOverflowError(field, value, width)
    return cleaned.rjust(width, "0")


def format_bsb(value: Optional[str], field: str = "BSB") -> str:
    """Render a routing code in canonical ``DDD-DDD`` form.

    Accepts "032001", "032-001" or "032 001".

    Raises:
        ValidationError: If fewer than six digits are present, or any
            character other than digits, spaces and dashes
        FieldOverflowError: If more than six digits are present
    """
    cleaned = _strip_separators(value, field)
    if len(cleaned) > BSB_DIGITS:
        raise FieldOverflowError(field, value, BSB_DIGITS)
    if len(cleaned) < BSB_DIGITS:
        raise ValidationError(f"{field} {value!r} must have {BSB_DIGITS} digits")
    return f"{cleaned[:3]}-{cleaned[3:]}"


def normalize_text(value: Optional[str], uppercase: bool = False) -> str:
    """Reduce text to the printable ASCII alphabet of the bank file.

    Accented letters are folded to their base letter. Anything else outside
    printable ASCII, including line breaks and tabs, becomes a space.
    Non-ASCII input is logged as a data-quality warning.

    Args:
        value: Text to normalize (None is treated as empty)
        uppercase: Upper-case the result

    Returns:
        Normalized text, which may be longer than the input when
        compatibility characters expand (e.g. ligatures)
    """
    if not value:
        return ""

    if not value.isascii():
        logger.warning("Non-ASCII characters replaced in %r", value)

    chars = []
    for ch in unicodedata.normalize("NFKD", value):
        if unicodedata.combining(ch):
            continue
        chars.append(ch if " " <= ch <= "~" else " ")

    result = "".join(chars)
    return result.upper() if uppercase else result
