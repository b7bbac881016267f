"""Utility functions for abafile."""

from abafile.utils.date_parser import parse_processing_date
from abafile.utils.amount_parser import parse_amount_cents, format_cents

__all__ = ["parse_processing_date", "parse_amount_cents", "format_cents"]
