"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
The ledger is kept in a JSON file by default, but the backend is swappable.
"""

from billbook.errors import CorruptLedgerError, StorageError
from billbook.services.storage.interface import (
    AuditStorageInterface,
    BlobStorageInterface,
)
from billbook.services.storage.json_file import JsonFileBlobStorage
from billbook.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryBlobStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "BlobStorageInterface",
    # Exceptions
    "CorruptLedgerError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryBlobStorage",
    "JsonFileBlobStorage",
]
