"""
Audit Logger

DESIGN DECISION: Every significant action on the expense log is logged.
This provides:
1. Traceability of adds, deletes and declined deletes
2. Debugging capability when storage fails
3. A short in-memory history the UI can show

The audit logger:
- Is synchronous, like the rest of the tracker
- Never raises for an event it is asked to record
- Keeps a bounded history, newest events last
"""

import logging
import sys
from collections import deque
from typing import Optional

import structlog

from expense_tracker.config import get_settings
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from expense_tracker.models.expense import Expense, ValidationIssue


def configure_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure stdlib logging and structlog for the application.

    JSON lines by default; a human-friendly console renderer otherwise.
    """
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(getattr(logging, log_level.upper(), logging.INFO))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (structlog)
    2. An in-memory history for inspection
    """

    def __init__(self, history_limit: Optional[int] = None):
        """
        Initialize audit logger.

        Args:
            history_limit: Number of events to keep in memory.
                           If None, taken from settings.
        """
        if history_limit is None:
            history_limit = get_settings().app.audit_history_limit
        self._history: deque[AuditEvent] = deque(maxlen=history_limit)
        self._logger = structlog.get_logger("expense_tracker.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at its severity and remember it."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._history.append(event)

    def get_recent_events(
        self,
        limit: int = 100,
        event_type: Optional[AuditEventType] = None,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events, newest first.

        Args:
            limit: Maximum number of events to return
            event_type: Only return events of this type
        """
        events = [
            event for event in reversed(self._history)
            if event_type is None or event.event_type == event_type
        ]
        return events[:limit]

    def log_expenses_loaded(self, slot_key: str, count: int) -> None:
        self.log(AuditEventBuilder.expenses_loaded(slot_key=slot_key, count=count))

    def log_load_failed(self, slot_key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.load_failed(
            slot_key=slot_key,
            error_message=error_message,
        ))

    def log_save_failed(self, slot_key: str, error_message: str, count: int) -> None:
        self.log(AuditEventBuilder.save_failed(
            slot_key=slot_key,
            error_message=error_message,
            count=count,
        ))

    def log_expense_added(self, expense: Expense) -> None:
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense.id,
            category=expense.category,
            amount=expense.amount,
        ))

    def log_expense_rejected(self, issues: list[ValidationIssue]) -> None:
        self.log(AuditEventBuilder.expense_rejected(
            issues=[
                {"field": i.field, "type": i.issue_type, "message": i.message}
                for i in issues
            ],
        ))

    def log_expense_deleted(self, expense_id: str, found: bool) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id=expense_id, found=found))

    def log_delete_cancelled(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.delete_cancelled(expense_id=expense_id))

    def log_export(self, path: str, count: int) -> None:
        self.log(AuditEventBuilder.expenses_exported(path=path, count=count))

    def log_export_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.export_failed(error_message=error_message))
