"""
Storage Services Package

Provides the abstract key-value interface and concrete implementations.
Local files are the default backend; the in-memory one is for tests.
"""

from expense_tracker.services.storage.interface import (
    CorruptDocumentError,
    KeyValueStorageInterface,
    StorageError,
    StorageQuotaExceededError,
    check_slot_key,
)
from expense_tracker.services.storage.local_file import LocalFileKeyValueStorage
from expense_tracker.services.storage.memory import InMemoryKeyValueStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    "check_slot_key",
    # Exceptions
    "CorruptDocumentError",
    "StorageError",
    "StorageQuotaExceededError",
    # Implementations
    "InMemoryKeyValueStorage",
    "LocalFileKeyValueStorage",
]
