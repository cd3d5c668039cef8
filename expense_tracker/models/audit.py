"""
Audit Models for Expense Tracker

Every significant action on the expense log is recorded as an audit event.
This provides:
1. Traceability of every add and delete
2. Debugging information when storage misbehaves
3. A record of what the user confirmed or declined

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from expense_tracker.models.expense import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    EXPENSES_LOADED = "expenses_loaded"
    EXPENSES_LOAD_FAILED = "expenses_load_failed"
    EXPENSES_SAVE_FAILED = "expenses_save_failed"

    # Mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REJECTED = "expense_rejected"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_DELETE_CANCELLED = "expense_delete_cancelled"

    # Export
    EXPENSES_EXPORTED = "expenses_exported"
    EXPENSES_EXPORT_FAILED = "expenses_export_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'slot', 'export')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "Food", "12.50")
        event = AuditEventBuilder.save_failed("quota exceeded", 3)
    """

    @staticmethod
    def expenses_loaded(slot_key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LOADED,
            entity_type="slot",
            entity_id=slot_key,
            description=f"Loaded {count} expenses",
            details={"count": count},
        )

    @staticmethod
    def load_failed(slot_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="slot",
            entity_id=slot_key,
            description="Failed to load expenses, starting with an empty list",
            error_message=error_message,
        )

    @staticmethod
    def save_failed(slot_key: str, error_message: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="slot",
            entity_id=slot_key,
            description=f"Failed to save {count} expenses",
            error_message=error_message,
            details={"count": count},
        )

    @staticmethod
    def expense_added(expense_id: str, category: str, amount: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {category} - {amount}",
            details={
                "category": category,
                "amount": str(amount),
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(expense_id: str, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description=(
                "Expense deleted" if found
                else "Delete confirmed but no expense had this id"
            ),
            details={"found": found},
            is_user_action=True,
        )

    @staticmethod
    def delete_cancelled(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETE_CANCELLED,
            entity_type="expense",
            entity_id=expense_id,
            description="User declined to delete expense",
            is_user_action=True,
        )

    @staticmethod
    def expenses_exported(path: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_EXPORTED,
            entity_type="export",
            entity_id=path,
            description=f"Exported {count} expenses",
            details={"count": count},
            is_user_action=True,
        )

    @staticmethod
    def export_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_EXPORT_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="export",
            description="Export failed",
            error_message=error_message,
            is_user_action=True,
        )
