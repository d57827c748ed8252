"""
Ledger Aggregates and Search

DESIGN DECISION: Totals are DERIVED, never stored.
Every function here is a pure function over a sequence of bills:
no storage access, no side effects. The ledger store and any
presentation layer call these on the current bill sequence.

Amounts are summed as Decimal and only rounded (half-up, 2 places)
when formatted, so totals never drift.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence, Union

from pydantic import BaseModel, Field

from billbook.models.bill import CATEGORIES, USERS, Bill


CENTS = Decimal("0.01")

DateFilter = Union[date, datetime, None]


def sum_amounts(bills: Iterable[Bill]) -> Decimal:
    """Exact sum of bill amounts."""
    return sum((bill.amount for bill in bills), Decimal("0"))


def format_total(value: Decimal) -> str:
    """Format a total to exactly two decimal places ("50.00")."""
    return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def total_for_user(bills: Iterable[Bill], user_id: int) -> str:
    return format_total(sum_amounts(b for b in bills if b.user_id == user_id))


def total_for_category(bills: Iterable[Bill], category_id: str) -> str:
    return format_total(sum_amounts(b for b in bills if b.category == category_id))


def grand_total(bills: Iterable[Bill]) -> str:
    return format_total(sum_amounts(bills))


def _calendar_day(value: Union[date, datetime]) -> date:
    """Local calendar day of a date or datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def matches_term(bill: Bill, term: str) -> bool:
    """
    Does a bill match a free-text search term?

    User name and description match case-insensitively. The amount
    matches on its plain number text, so "50" finds 50 and 150.5.
    An empty term matches everything.
    """
    needle = term.lower()
    if needle in bill.user_name.lower():
        return True
    if bill.description and needle in bill.description.lower():
        return True
    return term in bill.amount_text


def matches_date(bill: Bill, date_filter: DateFilter) -> bool:
    """Day-granularity match in local time. No filter matches everything."""
    if date_filter is None:
        return True
    return bill.local_date == _calendar_day(date_filter)


def search(
    bills: Sequence[Bill],
    term: str = "",
    date_filter: DateFilter = None,
) -> list[Bill]:
    """
    Filter bills by search term and optional calendar day.

    Results are sorted most recent first. The sort is stable, so bills
    with identical timestamps keep their insertion order.
    """
    term = term or ""
    found = [
        bill for bill in bills
        if matches_term(bill, term) and matches_date(bill, date_filter)
    ]
    return sorted(found, key=lambda bill: bill.date, reverse=True)


# =============================================================================
# SUMMARY
# =============================================================================

class UserTotal(BaseModel):
    user_id: int
    user_name: str
    total: str


class CategoryTotal(BaseModel):
    category_id: str
    category_name: str
    total: str


class LedgerSummary(BaseModel):
    """
    Every aggregate the dashboard shows, in one object.

    Every roster user and every category is listed, even at zero.
    """

    user_totals: list[UserTotal] = Field(default_factory=list)
    category_totals: list[CategoryTotal] = Field(default_factory=list)
    grand_total: str = "0.00"
    bill_count: int = Field(default=0, ge=0)

    def total_for_user(self, user_id: int) -> Optional[str]:
        for entry in self.user_totals:
            if entry.user_id == user_id:
                return entry.total
        return None

    def total_for_category(self, category_id: str) -> Optional[str]:
        for entry in self.category_totals:
            if entry.category_id == category_id:
                return entry.total
        return None


def summarize(bills: Sequence[Bill]) -> LedgerSummary:
    """Compute per-user, per-category and grand totals."""
    return LedgerSummary(
        user_totals=[
            UserTotal(
                user_id=user.id,
                user_name=user.name,
                total=total_for_user(bills, user.id),
            )
            for user in USERS
        ],
        category_totals=[
            CategoryTotal(
                category_id=category.id,
                category_name=category.name,
                total=total_for_category(bills, category.id),
            )
            for category in CATEGORIES
        ],
        grand_total=grand_total(bills),
        bill_count=len(bills),
    )
