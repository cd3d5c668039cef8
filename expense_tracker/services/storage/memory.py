"""
In-Memory Storage Implementation

Dict-backed key-value storage with the same quota rule as the file
backend. Used by tests and for sessions that should not touch disk.
"""

from typing import Optional

from expense_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageQuotaExceededError,
    check_slot_key,
)


class InMemoryKeyValueStorage(KeyValueStorageInterface):
    """Key-value storage held in a dict for the lifetime of the object."""

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        quota_bytes: Optional[int] = None,
    ):
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes
        for key, value in (initial or {}).items():
            self._items[check_slot_key(key)] = value

    @property
    def quota_bytes(self) -> Optional[int]:
        return self._quota_bytes

    @quota_bytes.setter
    def quota_bytes(self, value: Optional[int]) -> None:
        self._quota_bytes = value

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(check_slot_key(key))

    def set_item(self, key: str, value: str) -> None:
        check_slot_key(key)
        if self._quota_bytes is not None:
            required = len(value.encode("utf-8")) + sum(
                len(stored.encode("utf-8"))
                for name, stored in self._items.items()
                if name != key
            )
            if required > self._quota_bytes:
                raise StorageQuotaExceededError(key, required, self._quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(check_slot_key(key), None)

    def keys(self) -> list[str]:
        return sorted(self._items)
