"""
Core Data Models for Bill Book

These models define the schemas for everything the ledger stores.
They are designed to:
1. Enforce type safety at runtime
2. Serialize to the persisted JSON layout (camelCase keys)
3. Be immutable once created - bills are never edited in place

DESIGN DECISION: Python attributes are snake_case, persisted keys are the
camelCase names the stored blob has always used. Aliases bridge the two.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


CalendarDate = date


# =============================================================================
# ROSTER AND CATEGORIES - Fixed, never created or destroyed at runtime
# =============================================================================

class User(BaseModel):
    """A member of the household who can record bills."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Roster id")
    name: str = Field(..., min_length=1, max_length=100)


class Category(BaseModel):
    """A spending category."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)


USERS: tuple[User, ...] = (
    User(id=1, name="Zohaib"),
    User(id=2, name="Babar"),
    User(id=3, name="Mustafa"),
)

CATEGORIES: tuple[Category, ...] = (
    Category(id="food", name="Food"),
    Category(id="transport", name="Transport"),
    Category(id="utilities", name="Utilities"),
    Category(id="entertainment", name="Entertainment"),
    Category(id="other", name="Other"),
)


def find_user(user_id: int) -> Optional[User]:
    """Look up a roster user by id."""
    for user in USERS:
        if user.id == user_id:
            return user
    return None


def find_category(category_id: str) -> Optional[Category]:
    """Look up a category by id."""
    for category in CATEGORIES:
        if category.id == category_id:
            return category
    return None


# =============================================================================
# BILL
# =============================================================================

def new_bill_id() -> str:
    """
    Generate a bill id.

    UUID4 carries 122 random bits, so collisions within a household
    ledger are not a practical concern.
    """
    return str(uuid4())


def plain_amount(value: Decimal) -> str:
    """
    Render an amount the way a plain number prints: no exponent,
    no trailing zeros (50, 12.5, 0.05).
    """
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


class Bill(BaseModel):
    """
    One recorded expense.

    CRITICAL: user_name is a SNAPSHOT of the user's name when the bill
    was created. It is never kept in sync with the roster.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    id: str = Field(
        default_factory=new_bill_id,
        description="Unique, opaque bill id",
    )
    user_id: int = Field(
        ...,
        alias="userId",
        description="Roster id of the user who recorded the bill",
    )
    user_name: str = Field(
        ...,
        alias="userName",
        description="User name at creation time",
    )
    amount: Decimal = Field(
        ...,
        description="Amount spent",
    )
    date: datetime = Field(
        ...,
        description="When the expense happened (stored in UTC)",
    )
    category: str = Field(
        ...,
        description="Category id",
    )
    description: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Only finite numbers can be summed."""
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        return v

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        """
        Store timestamps in UTC at millisecond precision.

        Naive datetimes are taken as local time. Millisecond precision is
        what the persisted format carries, so in-memory and reloaded bills
        compare equal.
        """
        if v.tzinfo is None:
            v = v.astimezone()
        v = v.astimezone(timezone.utc)
        return v.replace(microsecond=(v.microsecond // 1000) * 1000)

    @field_validator("description", mode="before")
    @classmethod
    def blank_description_is_none(cls, v: Union[str, None]) -> Union[str, None]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, v: Decimal) -> Union[int, float]:
        """
        Amounts are written as JSON numbers.

        Accepted amounts carry at most 15 significant digits, so the float
        reads back as the same Decimal.
        """
        if v == v.to_integral_value():
            return int(v)
        return float(v)

    @field_serializer("date", when_used="json")
    def serialize_date(self, v: datetime) -> str:
        """ISO-8601 in UTC with a trailing Z, e.g. 2024-01-01T09:30:00.000Z."""
        return v.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        )

    @property
    def amount_text(self) -> str:
        """Amount as plain number text (used for searching)."""
        return plain_amount(self.amount)

    @property
    def local_date(self) -> CalendarDate:
        """Calendar date of the bill in the local timezone."""
        return self.date.astimezone().date()

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    def to_record(self) -> dict:
        """Convert to the persisted JSON record."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
