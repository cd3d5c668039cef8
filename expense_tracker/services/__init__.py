"""Services package."""

from expense_tracker.services.export import (
    ExpenseExporter,
    ExportError,
)
from expense_tracker.services.storage import (
    CorruptDocumentError,
    InMemoryKeyValueStorage,
    KeyValueStorageInterface,
    LocalFileKeyValueStorage,
    StorageError,
    StorageQuotaExceededError,
)

__all__ = [
    # Export
    "ExpenseExporter",
    "ExportError",
    # Storage
    "CorruptDocumentError",
    "InMemoryKeyValueStorage",
    "KeyValueStorageInterface",
    "LocalFileKeyValueStorage",
    "StorageError",
    "StorageQuotaExceededError",
]
