"""Validation package."""

from expense_tracker.validation.validator import (
    ExpenseValidationError,
    ExpenseValidator,
    coerce_candidate,
    parse_amount,
    parse_date,
)

__all__ = [
    "ExpenseValidationError",
    "ExpenseValidator",
    "coerce_candidate",
    "parse_amount",
    "parse_date",
]
