"""
Ledger Store

The one stateful component of Bill Book: an ordered sequence of bills,
loaded once when the store is built and rewritten in full on every change.

DESIGN DECISION: The store is an explicit object with its persistence
injected. Build it once per process and pass it to whoever needs it.
There are no module-level singletons.

Write ordering: the new sequence is persisted BEFORE it replaces the
in-memory sequence. If the write fails, the store is unchanged and the
StorageError reaches the caller.
"""

import json
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

import structlog
from pydantic import ValidationError

from billbook.audit import AuditLogger, configure_logging
from billbook.config import LedgerSettings, get_settings
from billbook.errors import CorruptLedgerError, LedgerValidationError
from billbook.models.bill import Bill, User
from billbook.queries import aggregates
from billbook.queries.aggregates import DateFilter, LedgerSummary
from billbook.services.storage import BlobStorageInterface, JsonFileBlobStorage
from billbook.validation import BillValidator


logger = structlog.get_logger(__name__)


def resolve_timestamp(value: Union[date, datetime, None]) -> datetime:
    """
    Turn the date a user picked into a bill timestamp.

    None means now. A bare date means local midnight of that day.
    """
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


class LedgerStore:
    """
    Holds the bill ledger and exposes mutations and aggregates.

    Mutations:
    - add_bill: validate, append, persist
    - delete_bill: owner check, remove, persist

    Queries are pure and never touch storage.
    """

    def __init__(
        self,
        storage: BlobStorageInterface,
        settings: Optional[LedgerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[BillValidator] = None,
    ):
        self._storage = storage
        self._settings = settings or get_settings()
        self._audit_logger = audit_logger
        self._validator = validator or BillValidator()
        self._key = self._settings.storage_key
        self._bills: list[Bill] = self.load_all()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[LedgerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ) -> "LedgerStore":
        """
        Build a store over the JSON file named by settings.storage_path.

        Also applies the logging level from settings.debug_mode.
        """
        settings = settings or get_settings()
        configure_logging(settings)
        return cls(
            JsonFileBlobStorage(settings.storage_path),
            settings=settings,
            audit_logger=audit_logger,
        )

    @property
    def bills(self) -> tuple[Bill, ...]:
        """All bills in insertion order."""
        return tuple(self._bills)

    def __len__(self) -> int:
        return len(self._bills)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load_all(self) -> list[Bill]:
        """
        Deserialize the persisted ledger.

        Returns an empty list if nothing is stored. Malformed data is
        logged and audited, then treated as an empty ledger unless
        strict_load is set, in which case CorruptLedgerError is raised.
        """
        blob = self._storage.get(self._key)
        if blob is None:
            return []

        try:
            bills = self._decode(blob)
        except CorruptLedgerError as e:
            logger.warning("ledger_malformed", storage_key=self._key, error=str(e))
            if self._audit_logger:
                self._audit_logger.log_ledger_load_failed(self._key, str(e))
            if self._settings.strict_load:
                raise
            return []

        if self._audit_logger:
            self._audit_logger.log_ledger_loaded(self._key, len(bills))
        return bills

    def _decode(self, blob: str) -> list[Bill]:
        try:
            data = json.loads(blob, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise CorruptLedgerError(f"Ledger is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise CorruptLedgerError(
                f"Ledger must be a JSON array, got {type(data).__name__}"
            )

        try:
            return [Bill.model_validate(item) for item in data]
        except ValidationError as e:
            raise CorruptLedgerError(
                f"Ledger holds an invalid bill record: {e.error_count()} errors"
            ) from e

    @staticmethod
    def _encode(bills: list[Bill]) -> str:
        return json.dumps([bill.to_record() for bill in bills], ensure_ascii=False)

    def _commit(self, bills: list[Bill]) -> None:
        """Rewrite the full persisted ledger, then adopt it in memory."""
        self._storage.set(self._key, self._encode(bills))
        self._bills = bills

    def _reject(
        self,
        error: LedgerValidationError,
        correlation_id: Optional[UUID],
    ) -> None:
        logger.info("ledger_input_rejected", kind=error.kind.value)
        if self._audit_logger:
            self._audit_logger.log_validation_failed(
                kind=error.kind.value,
                message=error.message,
                correlation_id=correlation_id,
            )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_bill(
        self,
        selected_user: Optional[User],
        amount: Union[str, int, Decimal, None],
        category: Optional[str],
        date: Union[date, datetime, None] = None,
        description: Optional[str] = "",
        correlation_id: Optional[UUID] = None,
    ) -> Bill:
        """
        Record a new bill for the selected user.

        Raises:
            MissingUserError: No user selected
            InvalidAmountError: Amount empty, not numeric or too precise
            MissingCategoryError: Category empty or unknown
            StorageError: The ledger could not be persisted
        """
        try:
            user, parsed_amount, known_category = self._validator.validate_new_bill(
                selected_user, amount, category
            )
        except LedgerValidationError as e:
            self._reject(e, correlation_id)
            raise

        bill = Bill(
            user_id=user.id,
            user_name=user.name,
            amount=parsed_amount,
            date=resolve_timestamp(date),
            category=known_category.id,
            description=(description or "").strip(),
        )

        self._commit(self._bills + [bill])

        logger.info("bill_added", bill_id=bill.id, user_id=user.id)
        if self._audit_logger:
            self._audit_logger.log_bill_saved(
                bill_id=bill.id,
                user_id=user.id,
                amount=bill.amount_text,
                category=bill.category,
                correlation_id=correlation_id,
            )
        return bill

    def delete_bill(
        self,
        bill_id: str,
        requesting_user_id: Optional[int],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """
        Remove a bill owned by the requesting user.

        Raises:
            NotOwnerError: Bill missing or owned by someone else
            StorageError: The ledger could not be persisted
        """
        try:
            self._validator.validate_delete(self.get_bill(bill_id), requesting_user_id)
        except LedgerValidationError as e:
            self._reject(e, correlation_id)
            raise

        index = next(i for i, bill in enumerate(self._bills) if bill.id == bill_id)
        self._commit(self._bills[:index] + self._bills[index + 1:])

        logger.info("bill_deleted", bill_id=bill_id, user_id=requesting_user_id)
        if self._audit_logger:
            self._audit_logger.log_bill_deleted(
                bill_id=bill_id,
                user_id=requesting_user_id,
                correlation_id=correlation_id,
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_bill(self, bill_id: str) -> Optional[Bill]:
        for bill in self._bills:
            if bill.id == bill_id:
                return bill
        return None

    def total_for_user(self, user_id: int) -> str:
        return aggregates.total_for_user(self._bills, user_id)

    def grand_total(self) -> str:
        return aggregates.grand_total(self._bills)

    def total_for_category(self, category_id: str) -> str:
        return aggregates.total_for_category(self._bills, category_id)

    def search(self, term: str = "", date_filter: DateFilter = None) -> list[Bill]:
        return aggregates.search(self._bills, term, date_filter)

    def summary(self) -> LedgerSummary:
        return aggregates.summarize(self._bills)
