"""
Ledger Session

This module holds the state a presentation layer needs between user
actions and drives the ledger store from it:
1. Who is logged in
2. The bill form being filled in (the draft)
3. The single error message currently shown
4. The confirm-then-delete flow
5. The history search box and date filter

DESIGN DECISION: Deleting is a two-step protocol.

    Idle --request_delete(id)--> PendingDelete(id)
    PendingDelete --confirm_delete()--> Idle   (bill removed)
    PendingDelete --cancel_delete()--> Idle    (nothing changes)

The state is an explicit tagged variant, never a nullable id.
"""

from datetime import date, datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from billbook.audit import AuditLogger, create_correlation_id
from billbook.errors import LedgerValidationError, MissingUserError, NotOwnerError
from billbook.ledger import LedgerStore
from billbook.models.bill import Bill, User, find_user


# =============================================================================
# DELETE CONFIRMATION STATE
# =============================================================================

class Idle(BaseModel):
    """No delete is waiting for confirmation."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"


class PendingDelete(BaseModel):
    """A delete is waiting for the user to confirm or cancel."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["pending_delete"] = "pending_delete"
    bill_id: str = Field(..., min_length=1)


DeleteState = Annotated[Union[Idle, PendingDelete], Field(discriminator="kind")]

IDLE = Idle()


# =============================================================================
# BILL FORM
# =============================================================================

PickedDate = Union[datetime, date]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class BillDraft(BaseModel):
    """
    Values of the bill form before saving.

    Amount stays text until save - it is exactly what the user typed.
    """

    amount: str = ""
    description: str = ""
    category: str = ""
    date: Optional[PickedDate] = Field(default_factory=_now)

    def clear(self) -> None:
        """Reset the typed fields. The picked date is kept."""
        self.amount = ""
        self.description = ""
        self.category = ""


# =============================================================================
# SESSION
# =============================================================================

class LedgerSession:
    """
    One user's interaction with a shared ledger store.

    All operations are synchronous and run to completion. Validation
    errors never escape: they become the session's `error` message.
    Storage errors do escape.
    """

    def __init__(
        self,
        store: LedgerStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger
        self.session_id = create_correlation_id()

        self.selected_user: Optional[User] = None
        self.draft = BillDraft()
        self.error = ""
        self.delete_state: DeleteState = IDLE

        self.search_term = ""
        self.date_filter: Optional[PickedDate] = None

    @property
    def store(self) -> LedgerStore:
        return self._store

    @property
    def is_logged_in(self) -> bool:
        return self.selected_user is not None

    @property
    def pending_bill_id(self) -> Optional[str]:
        if isinstance(self.delete_state, PendingDelete):
            return self.delete_state.bill_id
        return None

    def _clear_form(self) -> None:
        self.draft.clear()
        self.error = ""

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def select_user(self, user: User) -> None:
        """
        Log in as a roster user.

        Switching to a different user throws away the half-filled form
        and any error. Re-selecting the same user keeps them.
        """
        if self.selected_user and self.selected_user.id != user.id:
            self._clear_form()
            self.delete_state = IDLE
        self.selected_user = user

        if self._audit_logger:
            self._audit_logger.log_user_selected(
                user_id=user.id,
                user_name=user.name,
                correlation_id=self.session_id,
            )

    def select_user_by_id(self, user_id: int) -> User:
        """
        Raises:
            MissingUserError: No roster user has this id
        """
        user = find_user(user_id)
        if user is None:
            raise MissingUserError()
        self.select_user(user)
        return user

    def logout(self) -> None:
        previous = self.selected_user
        self.selected_user = None
        self._clear_form()
        self.delete_state = IDLE

        if previous and self._audit_logger:
            self._audit_logger.log_user_logged_out(
                user_id=previous.id,
                correlation_id=self.session_id,
            )

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def save_bill(self) -> Optional[Bill]:
        """
        Save the draft as a new bill.

        On a validation failure the error message is set and None is
        returned, with the draft left as typed so it can be corrected.
        """
        try:
            bill = self._store.add_bill(
                self.selected_user,
                amount=self.draft.amount,
                category=self.draft.category,
                date=self.draft.date,
                description=self.draft.description,
                correlation_id=self.session_id,
            )
        except LedgerValidationError as e:
            self.error = e.message
            return None

        self._clear_form()
        return bill

    # -------------------------------------------------------------------------
    # Deleting
    # -------------------------------------------------------------------------

    def can_delete(self, bill: Bill) -> bool:
        """Only the logged-in owner gets a delete action."""
        return self.selected_user is not None and bill.is_owned_by(self.selected_user.id)

    def request_delete(self, bill_id: str) -> bool:
        """
        Ask to delete a bill. Moves to PendingDelete if allowed.

        Returns True if a confirmation is now pending.
        """
        bill = self._store.get_bill(bill_id)
        if bill is None or not self.can_delete(bill):
            self.error = NotOwnerError.default_message
            return False

        self.delete_state = PendingDelete(bill_id=bill_id)
        if self._audit_logger:
            self._audit_logger.log_delete_requested(
                bill_id=bill_id,
                user_id=self.selected_user.id,
                correlation_id=self.session_id,
            )
        return True

    def confirm_delete(self) -> bool:
        """
        Apply the pending delete. No-op when nothing is pending.

        Returns True if a bill was removed.
        """
        state = self.delete_state
        if not isinstance(state, PendingDelete):
            return False

        self.delete_state = IDLE
        requesting_user_id = self.selected_user.id if self.selected_user else None
        try:
            self._store.delete_bill(
                state.bill_id,
                requesting_user_id,
                correlation_id=self.session_id,
            )
        except LedgerValidationError as e:
            self.error = e.message
            return False
        return True

    def cancel_delete(self) -> None:
        state = self.delete_state
        self.delete_state = IDLE
        if isinstance(state, PendingDelete) and self._audit_logger:
            self._audit_logger.log_delete_cancelled(
                bill_id=state.bill_id,
                correlation_id=self.session_id,
            )

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def clear_date_filter(self) -> None:
        self.date_filter = None

    def visible_bills(self) -> list[Bill]:
        """Bills matching the current search box and date filter, newest first."""
        return self._store.search(self.search_term, self.date_filter)
