"""Ledger store package."""

from billbook.ledger.store import LedgerStore, resolve_timestamp

__all__ = ["LedgerStore", "resolve_timestamp"]
