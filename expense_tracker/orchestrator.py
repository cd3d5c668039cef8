"""
Main Orchestrator for Expense Tracker

This module ties together the store, storage, validator, exporter and
audit logger, and exposes the commands a presentation layer calls:

1. start            - load the log, report a load failure
2. submit_expense   - validate and add a candidate
3. request_delete   - confirm, then delete by id
4. set_filter       - choose the category shown in the list
5. export           - write a dated JSON copy of the log

DESIGN DECISION: The tracker holds no globals and renders nothing.
Every command returns a CommandResult with the messages to show,
so a Streamlit page, a CLI or a test can drive it the same way.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import Settings, get_settings
from expense_tracker.models.expense import DeleteOutcome, Expense
from expense_tracker.models.feedback import CommandResult, UserMessage
from expense_tracker.services.export import ExpenseExporter, ExportError
from expense_tracker.services.storage import (
    KeyValueStorageInterface,
    LocalFileKeyValueStorage,
)
from expense_tracker.store import ConfirmCallback, ExpenseStore
from expense_tracker.validation import ExpenseValidationError, ExpenseValidator
from expense_tracker.validation.validator import CandidateInput


ALL_CATEGORIES = "all"

ADDED_MESSAGE = "Expense added successfully!"
DELETED_MESSAGE = "Expense deleted successfully!"
SAVE_FAILED_MESSAGE = "Failed to save expenses. Please try again."
LOAD_FAILED_MESSAGE = "Failed to load expenses. Starting fresh."
EXPORT_FAILED_MESSAGE = "Failed to export expenses."


class ExpenseTracker:
    """
    Command interface over one ExpenseStore.

    The category filter is view state: it narrows visible_expenses()
    and never the total.
    """

    def __init__(
        self,
        store: ExpenseStore,
        exporter: Optional[ExpenseExporter] = None,
        confirm: Optional[ConfirmCallback] = None,
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "$",
    ):
        self._store = store
        self._exporter = exporter or ExpenseExporter(get_settings().storage.export_dir)
        self._confirm = confirm
        self._audit_logger = audit_logger or AuditLogger()
        self._currency_symbol = currency_symbol
        self._filter: Optional[str] = None

    @property
    def store(self) -> ExpenseStore:
        return self._store

    @property
    def active_filter(self) -> Optional[str]:
        """Selected category, or None when every category is shown."""
        return self._filter

    def _save_failure_messages(self) -> list[UserMessage]:
        if self._store.last_storage_error is not None:
            return [UserMessage.error(SAVE_FAILED_MESSAGE)]
        return []

    def start(self) -> list[UserMessage]:
        """Load the log. Returns a warning if it had to start empty."""
        self._store.load()
        if self._store.last_storage_error is not None:
            return [UserMessage.warning(LOAD_FAILED_MESSAGE)]
        return []

    def submit_expense(self, candidate: CandidateInput) -> CommandResult:
        """
        Add an expense from raw form input.

        Rejections carry one error message per reported issue.
        """
        try:
            expense = self._store.add(candidate)
        except ExpenseValidationError as e:
            return CommandResult(
                success=False,
                issues=e.issues,
                messages=[UserMessage.error(issue.message) for issue in e.issues],
            )

        messages = self._save_failure_messages()
        messages.append(UserMessage.success(ADDED_MESSAGE))
        return CommandResult(success=True, expense=expense, messages=messages)

    def request_delete(
        self,
        expense_id: str,
        confirm: Optional[ConfirmCallback] = None,
    ) -> CommandResult:
        """
        Delete an expense once the user confirms.

        Args:
            expense_id: Id of the record to remove
            confirm: Confirmation gate for this request; falls back to
                     the gate the tracker was built with

        Raises:
            ValueError: If no confirmation gate is available
        """
        gate = confirm or self._confirm
        if gate is None:
            raise ValueError("Deleting an expense requires a confirmation callback")

        outcome = self._store.delete(expense_id, gate)
        if outcome == DeleteOutcome.CANCELLED:
            return CommandResult(success=False)

        messages = self._save_failure_messages()
        messages.append(UserMessage.success(DELETED_MESSAGE))
        return CommandResult(success=True, messages=messages)

    def set_filter(self, category: Optional[str]) -> list[Expense]:
        """
        Select the category to show. None, "" or "all" shows everything.

        Returns:
            The expenses now visible
        """
        if category is None or not category.strip() or category.strip().lower() == ALL_CATEGORIES:
            self._filter = None
        else:
            self._filter = category.strip()
        return self.visible_expenses()

    def visible_expenses(self) -> list[Expense]:
        """
        Expenses to render: newest date first, restricted to the filter.

        The sort is stable, so records sharing a date stay newest-added first.
        """
        expenses = self._store.expenses
        if self._filter is not None:
            expenses = [expense for expense in expenses if expense.category == self._filter]
        return sorted(expenses, key=lambda expense: expense.expense_date, reverse=True)

    def total(self) -> Decimal:
        """Total of every expense, ignoring the filter."""
        return self._store.total()

    def format_amount(self, amount: Decimal) -> str:
        return f"{self._currency_symbol}{amount:.2f}"

    def format_total(self) -> str:
        return self.format_amount(self.total())

    def export_document(self) -> str:
        """The export content, without writing a file."""
        return self._exporter.render(self._store.expenses)

    def export_filename(self, today: Optional[date] = None) -> str:
        return self._exporter.filename_for(today)

    def export(
        self,
        directory: Optional[Union[str, Path]] = None,
        today: Optional[date] = None,
    ) -> CommandResult:
        """Write the dated export file."""
        expenses = self._store.expenses
        try:
            path = self._exporter.export(expenses, today=today, directory=directory)
        except ExportError as e:
            self._audit_logger.log_export_failed(str(e))
            return CommandResult(
                success=False,
                messages=[UserMessage.error(EXPORT_FAILED_MESSAGE)],
            )

        self._audit_logger.log_export(path=str(path), count=len(expenses))
        return CommandResult(
            success=True,
            export_path=path,
            messages=[UserMessage.success(f"Exported {len(expenses)} expenses to {path.name}")],
        )


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
    confirm: Optional[ConfirmCallback] = None,
) -> ExpenseTracker:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to build from (cached settings by default)
        storage: Storage backend. Defaults to local files in the
                 configured data directory.
        confirm: Default confirmation gate for deletes

    Returns:
        A tracker that has not been started yet; call start() to load
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    configure_logging(app_settings.log_level, app_settings.json_logs)

    if storage is None:
        storage = LocalFileKeyValueStorage(
            storage_settings.data_dir,
            quota_bytes=storage_settings.quota_bytes,
        )

    audit_logger = AuditLogger(history_limit=app_settings.audit_history_limit)
    validator = ExpenseValidator(
        report_all_issues=app_settings.report_all_validation_issues,
    )

    store = ExpenseStore(
        storage=storage,
        slot_key=storage_settings.slot_key,
        validator=validator,
        audit_logger=audit_logger,
    )

    return ExpenseTracker(
        store=store,
        exporter=ExpenseExporter(storage_settings.export_dir),
        confirm=confirm,
        audit_logger=audit_logger,
        currency_symbol=app_settings.currency_symbol,
    )
