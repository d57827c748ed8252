"""
In-memory storage implementations.

Used in tests and for throwaway ledgers that should not touch disk.
"""

from typing import Optional

from billbook.models.audit import AuditEvent
from billbook.services.storage.interface import (
    AuditStorageInterface,
    BlobStorageInterface,
)


class InMemoryBlobStorage(BlobStorageInterface):
    """Dict-backed blob storage."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.write_count += 1

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class InMemoryAuditStorage(AuditStorageInterface):
    """List-backed, append-only audit storage."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
