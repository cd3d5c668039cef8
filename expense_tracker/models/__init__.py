"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    MAX_AMOUNT,
    DeleteOutcome,
    Expense,
    ExpenseCandidate,
    ValidationIssue,
    ValidationResult,
    dump_expenses,
    new_expense_id,
    parse_expenses,
)
from expense_tracker.models.feedback import (
    CommandResult,
    MessageKind,
    UserMessage,
    escape_markdown,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "DeleteOutcome",
    "Expense",
    "ExpenseCandidate",
    "ValidationIssue",
    "ValidationResult",
    "MAX_AMOUNT",
    "dump_expenses",
    "new_expense_id",
    "parse_expenses",
    # Feedback models
    "CommandResult",
    "MessageKind",
    "UserMessage",
    "escape_markdown",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
