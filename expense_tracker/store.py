"""
Expense Store

Owns the in-memory list of expenses, newest-added first, and keeps the
durable slot in sync with it.

GUARANTEES:
- Only validated records enter the list
- A rejected add or a declined delete changes nothing
- Storage failures never raise out of load/persist; the list in memory
  is kept (or starts empty) and the error is available on
  last_storage_error for the caller to report
- Every write replaces the whole slot with the whole list
"""

from collections.abc import Callable
from decimal import Decimal
from typing import Optional

from pydantic import ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import (
    DeleteOutcome,
    Expense,
    ValidationResult,
    dump_expenses,
    parse_expenses,
)
from expense_tracker.services.storage import (
    CorruptDocumentError,
    KeyValueStorageInterface,
    StorageError,
    check_slot_key,
)
from expense_tracker.validation import ExpenseValidationError, ExpenseValidator
from expense_tracker.validation.validator import CandidateInput


DELETE_PROMPT = "Are you sure you want to delete this expense?"

# Receives the prompt, returns True if the user said yes
ConfirmCallback = Callable[[str], bool]


class ExpenseStore:
    """
    The single owner of the expense list.

    Construct one per process and pass it to whatever needs it.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        slot_key: str = "expenseTracker",
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._slot_key = check_slot_key(slot_key)
        self._validator = validator or ExpenseValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._expenses: list[Expense] = []
        self.last_storage_error: Optional[StorageError] = None

    @property
    def slot_key(self) -> str:
        return self._slot_key

    @property
    def expenses(self) -> list[Expense]:
        """Current records, newest-added first (a copy)."""
        return list(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def _read_slot(self) -> list[Expense]:
        document = self._storage.get_item(self._slot_key)
        # Blank text counts as an absent slot
        if document is None or not document.strip():
            return []
        try:
            return parse_expenses(document)
        except ValidationError as e:
            raise CorruptDocumentError(
                f"Slot '{self._slot_key}' does not hold a valid expense list: "
                f"{e.error_count()} errors"
            ) from e

    def load(self) -> list[Expense]:
        """
        Replace the in-memory list with the contents of the slot.

        An absent or blank slot gives an empty list. An unreadable or corrupt
        slot also gives an empty list, with the error recorded.
        """
        try:
            expenses = self._read_slot()
        except StorageError as e:
            self.last_storage_error = e
            self._audit_logger.log_load_failed(
                slot_key=self._slot_key,
                error_message=str(e),
            )
            expenses = []
        else:
            self.last_storage_error = None
            self._audit_logger.log_expenses_loaded(
                slot_key=self._slot_key,
                count=len(expenses),
            )

        self._expenses = expenses
        return list(expenses)

    def persist(self) -> bool:
        """
        Write the whole list to the slot.

        Returns:
            True if saved, False if the storage refused the write.
            The in-memory list is untouched either way.
        """
        document = dump_expenses(self._expenses)
        try:
            self._storage.set_item(self._slot_key, document)
        except StorageError as e:
            self.last_storage_error = e
            self._audit_logger.log_save_failed(
                slot_key=self._slot_key,
                error_message=str(e),
                count=len(self._expenses),
            )
            return False

        self.last_storage_error = None
        return True

    def validate(self, candidate: CandidateInput) -> ValidationResult:
        """Validate a candidate without touching the list."""
        return self._validator.validate(candidate)

    def add(self, candidate: CandidateInput) -> Expense:
        """
        Validate, prepend and persist a new expense.

        Returns:
            The new record. It stays in memory even if the save
            fails; check last_storage_error after the call.

        Raises:
            ExpenseValidationError: If the candidate is rejected
        """
        result = self._validator.validate(candidate)
        if not result.is_valid:
            self._audit_logger.log_expense_rejected(result.issues)
            raise ExpenseValidationError(result.issues)

        expense = result.expense
        self._expenses.insert(0, expense)
        self._audit_logger.log_expense_added(expense)
        self.persist()
        return expense

    def delete(self, expense_id: str, confirm: ConfirmCallback) -> DeleteOutcome:
        """
        Delete an expense after the user confirms.

        Args:
            expense_id: Id of the record to remove
            confirm: Gate asked with DELETE_PROMPT before anything changes

        Returns:
            CANCELLED if the user declined, otherwise DELETED or
            NOT_FOUND. The list is persisted whenever the user confirmed.
        """
        if not confirm(DELETE_PROMPT):
            self._audit_logger.log_delete_cancelled(expense_id)
            return DeleteOutcome.CANCELLED

        remaining = [expense for expense in self._expenses if expense.id != expense_id]
        found = len(remaining) != len(self._expenses)
        self._expenses = remaining

        self._audit_logger.log_expense_deleted(expense_id=expense_id, found=found)
        self.persist()
        return DeleteOutcome.DELETED if found else DeleteOutcome.NOT_FOUND

    def get(self, expense_id: str) -> Optional[Expense]:
        """Find a record by id."""
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def total(self) -> Decimal:
        """Sum of all amounts, whatever filter the UI has applied."""
        return sum((expense.amount for expense in self._expenses), Decimal("0"))

    def by_category(self, category: str) -> list[Expense]:
        """Records in one category, in list order."""
        return [expense for expense in self._expenses if expense.category == category]

    def total_by_category(self, category: str) -> Decimal:
        """Sum of amounts in one category."""
        return sum((expense.amount for expense in self.by_category(category)), Decimal("0"))

    def categories(self) -> list[str]:
        """Distinct categories in use, in order of first appearance."""
        return list(dict.fromkeys(expense.category for expense in self._expenses))
