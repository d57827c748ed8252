"""Validation package."""

from billbook.validation.validator import (
    MAX_AMOUNT_DIGITS,
    MAX_AMOUNT_EXPONENT,
    BillValidator,
    fits_json_number,
    parse_amount,
)

__all__ = [
    "MAX_AMOUNT_DIGITS",
    "MAX_AMOUNT_EXPONENT",
    "BillValidator",
    "fits_json_number",
    "parse_amount",
]
