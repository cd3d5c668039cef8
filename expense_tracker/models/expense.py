"""
Core Data Models for Expense Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Reject invalid records at construction time
2. Provide clear validation error messages
3. Serialize to the durable slot document format

DESIGN DECISION: An Expense can only exist in a valid state.
Raw user input is held in ExpenseCandidate until the validator
turns it into an Expense. Nothing downstream re-checks invariants.

Document field names (id, amount, category, description, date, createdAt)
are fixed by the stored format and exposed through aliases.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)


# Largest amount a single record may hold. Keeps sums inside the default
# decimal context.
MAX_AMOUNT = Decimal("999999999999.99")


def new_expense_id() -> str:
    """Generate a fresh opaque expense identifier."""
    return uuid4().hex


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded expense.

    CRITICAL: Records are immutable. There is no edit operation;
    a record is created by the store's add and destroyed by delete.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        frozen=True,
    )

    # Identity
    id: str = Field(
        default_factory=new_expense_id,
        min_length=1,
        description="Opaque unique identifier, used as the delete key"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        description="Positive amount in the configured currency, at most MAX_AMOUNT"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category label (opaque to the store)"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Free-text description"
    )
    expense_date: date = Field(
        ...,
        alias="date",
        description="Calendar date the expense happened on"
    )

    # Set once, used for audit and export only
    created_at: datetime = Field(
        default_factory=utc_now,
        alias="createdAt",
        description="When the record was created"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def amount_from_text(cls, v: Any) -> Any:
        """Convert floats through their text form so 7.25 stays 7.25."""
        if isinstance(v, float):
            return str(v)
        return v


class ExpenseCandidate(BaseModel):
    """
    Raw, unvalidated input proposed for becoming an Expense.

    All fields are optional and loosely typed because this is
    whatever the form submitted. ExpenseValidator decides.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    amount: Any = None
    category: Any = None
    description: Any = None
    expense_date: Any = Field(default=None, alias="date")


class DeleteOutcome(str, Enum):
    """Result of a delete request."""
    DELETED = "deleted"          # Confirmed, record removed
    NOT_FOUND = "not_found"      # Confirmed, no record had that id
    CANCELLED = "cancelled"      # User declined the confirmation


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'invalid_format')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationResult(BaseModel):
    """
    Outcome of validating one candidate.

    Either is_valid with the constructed expense, or not valid
    with at least one issue.
    """

    validated_at: datetime = Field(
        default_factory=utc_now
    )
    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    expense: Optional[Expense] = None

    @property
    def error_count(self) -> int:
        return len(self.issues)

    @property
    def first_issue(self) -> Optional[ValidationIssue]:
        return self.issues[0] if self.issues else None

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]


# =============================================================================
# DOCUMENT (DE)SERIALIZATION
# =============================================================================

_EXPENSE_LIST = TypeAdapter(list[Expense])


def dump_expenses(expenses: list[Expense], indent: Optional[int] = None) -> str:
    """Serialize expenses to the slot document (a JSON array)."""
    return _EXPENSE_LIST.dump_json(expenses, by_alias=True, indent=indent).decode("utf-8")


def parse_expenses(document: str) -> list[Expense]:
    """
    Parse a slot document back into expenses.

    Raises pydantic.ValidationError if the document is not valid JSON
    or any record breaks an Expense invariant.
    """
    return _EXPENSE_LIST.validate_json(document)
