"""Ledger aggregate and search package."""

from billbook.queries.aggregates import (
    CategoryTotal,
    LedgerSummary,
    UserTotal,
    format_total,
    grand_total,
    matches_date,
    matches_term,
    search,
    sum_amounts,
    summarize,
    total_for_category,
    total_for_user,
)

__all__ = [
    "CategoryTotal",
    "LedgerSummary",
    "UserTotal",
    "format_total",
    "grand_total",
    "matches_date",
    "matches_term",
    "search",
    "sum_amounts",
    "summarize",
    "total_for_category",
    "total_for_user",
]
