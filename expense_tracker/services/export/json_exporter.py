"""
JSON Export

Writes the full expense list to a dated, human-readable JSON file
(expenses-YYYY-MM-DD.json). The content uses the same field names as
the durable slot, pretty-printed with two-space indentation.
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Optional, Union

from expense_tracker.models.expense import Expense, dump_expenses


EXPORT_INDENT = 2


class ExportError(Exception):
    """The export file could not be written."""
    pass


class ExpenseExporter:
    """Exports expenses to JSON files in one directory."""

    def __init__(self, export_dir: Union[str, Path]):
        self._export_dir = Path(export_dir)

    @property
    def export_dir(self) -> Path:
        return self._export_dir

    @staticmethod
    def filename_for(day: Optional[date] = None) -> str:
        """Export file name for a given day (today by default)."""
        day = day or date.today()
        return f"expenses-{day.isoformat()}.json"

    @staticmethod
    def render(expenses: list[Expense]) -> str:
        """Render expenses as the export document."""
        return dump_expenses(expenses, indent=EXPORT_INDENT)

    def export(
        self,
        expenses: list[Expense],
        today: Optional[date] = None,
        directory: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Write the export file, replacing any export from the same day.

        Returns:
            Path of the written file

        Raises:
            ExportError: If the file cannot be written
        """
        target_dir = Path(directory) if directory is not None else self._export_dir
        path = target_dir / self.filename_for(today)
        document = self.render(expenses)

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".export.", suffix=".tmp", dir=target_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(document)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ExportError(f"Failed to write export {path}: {e}") from e

        return path
