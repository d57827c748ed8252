"""Services package."""

from billbook.services.storage import (
    AuditStorageInterface,
    BlobStorageInterface,
    CorruptLedgerError,
    InMemoryAuditStorage,
    InMemoryBlobStorage,
    JsonFileBlobStorage,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "BlobStorageInterface",
    "CorruptLedgerError",
    "InMemoryAuditStorage",
    "InMemoryBlobStorage",
    "JsonFileBlobStorage",
    "StorageError",
]
