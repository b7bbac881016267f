"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount_cents(amount_str: str) -> int:
    """Parse a dollar amount string into whole cents.

    Handles various formats:
    - "2500"
    - "2500.00"
    - "$2,500.50"
    - "1750.5"

    Args:
        amount_str: Amount string in dollars

    Returns:
        Amount in cents

    Raises:
        ValueError: If amount string cannot be parsed, is negative, or has
            fractions of a cent
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$\s]", "", amount_str).replace(",", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount '{amount_str}' cannot be negative")

    cents = amount * 100
    if cents != cents.to_integral_value():
        raise ValueError(f"Amount '{amount_str}' has fractions of a cent")
    return int(cents)


def format_cents(cents: int) -> str:
    """Format an amount in cents as dollars, e.g. 175050 -> "$1,750.50"."""
    return f"${cents // 100:,}.{cents % 100:02d}"
