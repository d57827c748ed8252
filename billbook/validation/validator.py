"""
Bill Input Validation

DESIGN DECISION: Checks run in a fixed order and stop at the first
failure, because the user only ever sees one message at a time:

1. Someone must be selected
2. Amount must be a number
3. Category must be one we know

IMPORTANT: Validation NEVER silently fixes input.
A bad amount is rejected, not rounded or guessed at.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from billbook.errors import (
    InvalidAmountError,
    MissingCategoryError,
    MissingUserError,
    NotOwnerError,
)
from billbook.models.bill import Bill, Category, User, find_category


# Amounts are persisted as JSON numbers, so they must survive the trip
# through a binary double unchanged.
MAX_AMOUNT_DIGITS = 15
MAX_AMOUNT_EXPONENT = 300


def parse_amount(raw: Union[str, int, Decimal, None]) -> Decimal:
    """
    Parse an amount typed by the user.

    Accepts anything that reads as a plain finite number, with optional
    surrounding whitespace, a sign, a decimal point or an exponent.
    Digit separators are not accepted. Amounts with more than
    MAX_AMOUNT_DIGITS significant digits, or an exponent beyond
    MAX_AMOUNT_EXPONENT, are rejected.

    Raises:
        InvalidAmountError: If the text is empty, not a finite number
            or too precise to store exactly
    """
    if raw is None:
        raise InvalidAmountError()

    text = str(raw).strip()
    if not text or "_" in text:
        raise InvalidAmountError()

    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InvalidAmountError()

    if not value.is_finite():
        raise InvalidAmountError()

    if value and not fits_json_number(value):
        raise InvalidAmountError()

    return value


def fits_json_number(value: Decimal) -> bool:
    """True if the amount round-trips exactly through a JSON number."""
    if len(value.normalize().as_tuple().digits) > MAX_AMOUNT_DIGITS:
        return False
    return abs(value.adjusted()) <= MAX_AMOUNT_EXPONENT


class BillValidator:
    """
    Validates ledger mutations before they touch the ledger.

    Amounts are only checked for being numeric. Zero and negative
    amounts are accepted, e.g. to record a refund.
    """

    def validate_new_bill(
        self,
        selected_user: Optional[User],
        amount: Union[str, int, Decimal, None],
        category: Optional[str],
    ) -> tuple[User, Decimal, Category]:
        """
        Validate the inputs of a new bill.

        Returns:
            (user, parsed_amount, category)

        Raises:
            MissingUserError, InvalidAmountError, MissingCategoryError
        """
        if selected_user is None:
            raise MissingUserError()

        parsed = parse_amount(amount)

        category_id = (category or "").strip()
        if not category_id:
            raise MissingCategoryError()

        known = find_category(category_id)
        if known is None:
            raise MissingCategoryError()

        return selected_user, parsed, known

    def validate_delete(
        self,
        bill: Optional[Bill],
        requesting_user_id: Optional[int],
    ) -> Bill:
        """
        Only the user who recorded a bill may delete it.

        A missing bill is reported the same way as someone else's bill.

        Raises:
            NotOwnerError
        """
        if bill is None or requesting_user_id is None:
            raise NotOwnerError()
        if not bill.is_owned_by(requesting_user_id):
            raise NotOwnerError()
        return bill
