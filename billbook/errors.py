"""
Error taxonomy for Bill Book.

Validation errors are all user-input problems: non-fatal, shown as a
single message, fixed by correcting the input and trying again.
Storage errors come from the persistence backend and propagate.
"""

from enum import Enum
from typing import Optional


class ValidationErrorKind(str, Enum):
    """Kinds of user-input validation failure."""
    MISSING_USER = "missing_user"
    INVALID_AMOUNT = "invalid_amount"
    MISSING_CATEGORY = "missing_category"
    NOT_OWNER = "not_owner"


class BillBookError(Exception):
    """Base exception for Bill Book."""
    pass


class LedgerValidationError(BillBookError):
    """
    A ledger operation was rejected because of its input.

    `message` is the text shown to the user.
    """

    kind: ValidationErrorKind
    default_message: str = "Invalid input"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingUserError(LedgerValidationError):
    """No user is selected."""
    kind = ValidationErrorKind.MISSING_USER
    default_message = "Please select a user"


class InvalidAmountError(LedgerValidationError):
    """Amount is empty or not a number."""
    kind = ValidationErrorKind.INVALID_AMOUNT
    default_message = "Please enter a valid amount"


class MissingCategoryError(LedgerValidationError):
    """No (known) category was chosen."""
    kind = ValidationErrorKind.MISSING_CATEGORY
    default_message = "Please select a category"


class NotOwnerError(LedgerValidationError):
    """Bill does not exist or belongs to someone else."""
    kind = ValidationErrorKind.NOT_OWNER
    default_message = "You can only delete your own bills"


class StorageError(BillBookError):
    """Base exception for storage operations."""
    pass


class CorruptLedgerError(StorageError):
    """Persisted ledger data could not be decoded."""
    pass
