"""
Local File Storage Implementation

DESIGN DECISION: Each slot is one JSON file in a data directory because:
1. Users can open and back up their data with any text editor
2. No database setup required
3. A whole-value replace maps onto write-temp-then-rename, which is atomic

TRADEOFFS:
- Not suitable for large or concurrent workloads (one user, one process)
- The quota is checked against the files on disk at write time
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from expense_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageQuotaExceededError,
    check_slot_key,
)


SLOT_SUFFIX = ".json"


class LocalFileKeyValueStorage(KeyValueStorageInterface):
    """
    File-per-slot storage in a local directory.

    The directory is created on first write.
    """

    def __init__(self, directory: Union[str, Path], quota_bytes: Optional[int] = None):
        self._directory = Path(directory)
        self._quota_bytes = quota_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{check_slot_key(key)}{SLOT_SUFFIX}"

    def _used_bytes_excluding(self, key: str) -> int:
        """Size of every stored slot except the one being replaced."""
        total = 0
        target = self._path_for(key)
        for path in self._directory.glob(f"*{SLOT_SUFFIX}"):
            if path != target and path.is_file():
                total += path.stat().st_size
        return total

    def get_item(self, key: str) -> Optional[str]:
        """Read a slot file."""
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read slot '{key}': {e}") from e

    def set_item(self, key: str, value: str) -> None:
        """Atomically replace a slot file."""
        path = self._path_for(key)
        data = value.encode("utf-8")

        try:
            self._directory.mkdir(parents=True, exist_ok=True)

            if self._quota_bytes is not None:
                required = self._used_bytes_excluding(key) + len(data)
                if required > self._quota_bytes:
                    raise StorageQuotaExceededError(key, required, self._quota_bytes)

            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self._directory
            )
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                # Leave the previous value in place
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except StorageError:
            raise
        except OSError as e:
            raise StorageError(f"Failed to write slot '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        """Delete a slot file if it exists."""
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove slot '{key}': {e}") from e

    def keys(self) -> list[str]:
        """List slot names found in the directory."""
        if not self._directory.is_dir():
            return []
        return sorted(
            path.name[:-len(SLOT_SUFFIX)]
            for path in self._directory.glob(f"*{SLOT_SUFFIX}")
            if path.is_file()
        )
