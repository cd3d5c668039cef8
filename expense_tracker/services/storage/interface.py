"""
Abstract Storage Interface

DESIGN DECISION: The expense log lives in a named slot of a simple
key-value area. Every write replaces the whole value of a slot, every
read returns the whole value. This allows us to:
1. Keep the store free of file handling
2. Use in-memory storage for testing
3. Swap the local file backend for something else later

The interface is intentionally tiny - get, set, remove, list.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional


SLOT_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$")


def check_slot_key(key: str) -> str:
    """Reject keys that cannot be used as a slot name."""
    if not isinstance(key, str) or not SLOT_KEY_PATTERN.match(key):
        raise ValueError(f"Invalid slot key: {key!r}")
    return key


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for durable key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the whole value of a slot.

        Args:
            key: Slot name

        Returns:
            The stored text, or None if the slot is absent

        Raises:
            StorageError: If the slot exists but cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Replace the whole value of a slot.

        Either the new value is fully stored or the old one is kept.

        Args:
            key: Slot name
            value: Text to store

        Raises:
            StorageQuotaExceededError: If the value does not fit
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a slot. Removing an absent slot is a no-op.

        Raises:
            StorageError: If removal fails
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """
        List the names of all stored slots.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageQuotaExceededError(StorageError):
    """The value would push the storage area past its quota."""

    def __init__(self, key: str, required_bytes: int, quota_bytes: int):
        self.key = key
        self.required_bytes = required_bytes
        self.quota_bytes = quota_bytes
        super().__init__(
            f"Storage quota exceeded writing '{key}': "
            f"{required_bytes} bytes needed, quota is {quota_bytes}"
        )


class CorruptDocumentError(StorageError):
    """The slot holds something that is not a valid expense document."""
    pass
