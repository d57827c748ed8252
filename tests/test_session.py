"""Tests for the ledger session (identity, bill form, delete confirmation)."""

import pytest
from datetime import date

from billbook.errors import MissingUserError
from billbook.models.audit import AuditEventType
from billbook.session import IDLE, BillDraft, Idle, LedgerSession, PendingDelete


def fill(session, amount="50", category="food", description="", when=date(2024, 1, 1)):
    session.draft.amount = amount
    session.draft.category = category
    session.draft.description = description
    session.draft.date = when


class TestIdentity:
    """Tests for selecting and switching users."""

    def test_starts_logged_out(self, session):
        assert session.selected_user is None
        assert not session.is_logged_in
        assert session.delete_state == IDLE

    def test_select_user(self, session, zohaib):
        session.select_user(zohaib)
        assert session.selected_user == zohaib
        assert session.is_logged_in

    def test_select_user_by_id(self, session):
        assert session.select_user_by_id(2).name == "Babar"

    def test_select_unknown_user_id(self, session):
        with pytest.raises(MissingUserError):
            session.select_user_by_id(7)

    def test_switching_user_clears_form(self, session, zohaib, babar):
        """Test that a half-filled form doesn't carry over to someone else."""
        session.select_user(zohaib)
        fill(session, description="Half typed")
        session.error = "Please enter a valid amount"

        session.select_user(babar)

        assert session.draft.amount == ""
        assert session.draft.description == ""
        assert session.draft.category == ""
        assert session.error == ""

    def test_reselecting_same_user_keeps_form(self, session, zohaib):
        session.select_user(zohaib)
        fill(session)
        session.select_user(zohaib)
        assert session.draft.amount == "50"

    def test_logout_clears_everything(self, session, zohaib):
        session.select_user(zohaib)
        fill(session)
        session.logout()
        assert session.selected_user is None
        assert session.draft.amount == ""
        assert session.error == ""

    def test_identity_changes_are_audited(self, session, audit_storage, zohaib):
        session.select_user(zohaib)
        session.logout()
        types = [e.event_type for e in audit_storage.events]
        assert types[-2:] == [AuditEventType.USER_SELECTED, AuditEventType.USER_LOGGED_OUT]
        assert all(e.correlation_id == session.session_id for e in audit_storage.events[-2:])


class TestSaveBill:
    """Tests for saving the bill form."""

    def test_save_without_user_sets_error(self, session):
        fill(session)
        assert session.save_bill() is None
        assert session.error == "Please select a user"

    def test_save_with_bad_amount_keeps_draft(self, session, zohaib):
        session.select_user(zohaib)
        fill(session, amount="")
        assert session.save_bill() is None
        assert session.error == "Please enter a valid amount"
        assert session.draft.category == "food"
        assert len(session.store) == 0

    def test_save_without_category(self, session, zohaib):
        session.select_user(zohaib)
        fill(session, category="")
        session.save_bill()
        assert session.error == "Please select a category"

    def test_successful_save_clears_form_but_keeps_date(self, session, zohaib):
        session.select_user(zohaib)
        fill(session, description="Lunch")
        session.error = "old error"

        bill = session.save_bill()

        assert bill is not None
        assert bill.description == "Lunch"
        assert session.error == ""
        assert session.draft.amount == ""
        assert session.draft.date == date(2024, 1, 1)
        assert session.store.total_for_user(zohaib.id) == "50.00"

    def test_long_description_saved(self, session, zohaib):
        session.select_user(zohaib)
        fill(session, description="z" * 600)
        bill = session.save_bill()
        assert bill is not None
        assert bill.description == "z" * 600
        assert session.error == ""

    def test_draft_date_defaults_to_now(self):
        assert BillDraft().date is not None


class TestDeleteProtocol:
    """Tests for the confirm-then-delete state machine."""

    @pytest.fixture
    def zohaib_bill(self, session, zohaib):
        session.select_user(zohaib)
        fill(session)
        return session.save_bill()

    def test_request_moves_to_pending(self, session, zohaib_bill):
        assert session.request_delete(zohaib_bill.id) is True
        assert session.delete_state == PendingDelete(bill_id=zohaib_bill.id)
        assert session.pending_bill_id == zohaib_bill.id
        assert len(session.store) == 1

    def test_confirm_deletes_and_returns_to_idle(self, session, zohaib_bill):
        session.request_delete(zohaib_bill.id)
        assert session.confirm_delete() is True
        assert isinstance(session.delete_state, Idle)
        assert session.store.get_bill(zohaib_bill.id) is None

    def test_cancel_is_a_no_op(self, session, zohaib_bill, audit_storage):
        session.request_delete(zohaib_bill.id)
        session.cancel_delete()
        assert session.delete_state == IDLE
        assert session.store.bills == (zohaib_bill,)
        assert audit_storage.events[-1].event_type == AuditEventType.DELETE_CANCELLED

    def test_confirm_when_idle_does_nothing(self, session, zohaib_bill):
        assert session.confirm_delete() is False
        assert len(session.store) == 1

    def test_foreign_bill_cannot_be_requested(self, session, zohaib_bill, babar):
        """Test Babar trying to delete Zohaib's bill."""
        session.select_user(babar)
        assert session.request_delete(zohaib_bill.id) is False
        assert session.error == "You can only delete your own bills"
        assert session.delete_state == IDLE
        assert len(session.store) == 1

    def test_unknown_bill_cannot_be_requested(self, session, zohaib_bill):
        assert session.request_delete("missing") is False
        assert session.error == "You can only delete your own bills"

    def test_can_delete_only_own_bills(self, session, zohaib_bill, mustafa):
        assert session.can_delete(zohaib_bill)
        session.select_user(mustafa)
        assert not session.can_delete(zohaib_bill)

    def test_logout_drops_pending_delete(self, session, zohaib_bill):
        session.request_delete(zohaib_bill.id)
        session.logout()
        assert session.delete_state == IDLE
        assert session.confirm_delete() is False
        assert len(session.store) == 1

    def test_bill_removed_elsewhere_before_confirm(self, session, zohaib_bill, zohaib):
        """Test that confirming a bill that vanished reports an error."""
        session.request_delete(zohaib_bill.id)
        session.store.delete_bill(zohaib_bill.id, zohaib.id)
        assert session.confirm_delete() is False
        assert session.error == "You can only delete your own bills"
        assert session.delete_state == IDLE


class TestHistory:
    """Tests for the bill history view."""

    def test_visible_bills_uses_search_and_date(self, session, zohaib, babar):
        session.select_user(zohaib)
        fill(session, amount="50", when=date(2024, 1, 1))
        first = session.save_bill()
        session.select_user(babar)
        fill(session, amount="75", category="transport", when=date(2024, 1, 2))
        second = session.save_bill()

        assert session.visible_bills() == [second, first]

        session.search_term = "babar"
        assert session.visible_bills() == [second]

        session.search_term = ""
        session.date_filter = date(2024, 1, 1)
        assert session.visible_bills() == [first]

        session.clear_date_filter()
        assert session.date_filter is None
        assert len(session.visible_bills()) == 2

    def test_sessions_share_one_store(self, store, zohaib):
        """Test that two sessions over one store see each other's bills."""
        first = LedgerSession(store)
        second = LedgerSession(store)
        first.select_user(zohaib)
        fill(first)
        bill = first.save_bill()
        assert second.visible_bills() == [bill]
        assert first.session_id != second.session_id
