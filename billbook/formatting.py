"""Display helpers for dates, amounts and categories."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from billbook.config import get_settings
from billbook.models.bill import find_category
from billbook.queries.aggregates import format_total


def format_date(value: Union[date, datetime]) -> str:
    """Long form local date, e.g. "January 1, 2024"."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        value = value.date()
    return f"{value:%B} {value.day}, {value.year}"


def format_amount(
    value: Union[Decimal, str, int],
    currency_symbol: Optional[str] = None,
) -> str:
    """Amount with currency symbol and two decimals, e.g. "₹50.00"."""
    symbol = get_settings().currency_symbol if currency_symbol is None else currency_symbol
    return f"{symbol}{format_total(Decimal(str(value)))}"


def category_name(category_id: str) -> Optional[str]:
    """Display name of a category, None for ids we don't know."""
    category = find_category(category_id)
    return category.name if category else None
