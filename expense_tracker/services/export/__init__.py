"""Export services package."""

from expense_tracker.services.export.json_exporter import (
    EXPORT_INDENT,
    ExpenseExporter,
    ExportError,
)

__all__ = ["EXPORT_INDENT", "ExpenseExporter", "ExportError"]
