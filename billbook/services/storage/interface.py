"""
Abstract Storage Interface

DESIGN DECISION: The ledger never touches a file or database directly.
It is handed a storage capability that can read and write one serialized
blob per key. This allows us to:
1. Keep the ledger in a local JSON file
2. Use in-memory storage for testing
3. Swap in another key-value backend without touching ledger logic

The interface is intentionally tiny - the ledger rewrites its whole blob
on every change, so get/set is all it needs.
"""

from abc import ABC, abstractmethod
from typing import Optional

from billbook.models.audit import AuditEvent


class BlobStorageInterface(ABC):
    """
    Abstract key-value storage holding serialized blobs.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Returns:
            The blob, or None if nothing is stored under the key

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the blob stored under a key.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        The ledger itself only reads and replaces its blob. This is for
        tools that reset or migrate a store.

        Returns:
            True if the key existed
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass
