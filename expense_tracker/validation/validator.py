"""
Expense Candidate Validation

DESIGN DECISION: Validation runs the field checks in a fixed order:

1. amount      - present, numeric, greater than zero and at most MAX_AMOUNT
2. category    - non-empty
3. description - non-empty after trimming
4. date        - present and a parseable calendar date

By default the first failing check stops validation and is the only
reason reported, so the user fixes one field at a time. Setting
report_all_validation_issues switches to reporting every failing field.

IMPORTANT: Validation NEVER silently fixes issues beyond trimming
whitespace. Anything it cannot read is reported back.
"""

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from pydantic import ValidationError

from expense_tracker.config import get_settings
from expense_tracker.models.expense import (
    MAX_AMOUNT,
    Expense,
    ExpenseCandidate,
    ValidationIssue,
    ValidationResult,
)


AMOUNT_MESSAGE = "Please enter a valid amount greater than 0."
CATEGORY_MESSAGE = "Please select a category."
DESCRIPTION_MESSAGE = "Please enter a description."
DATE_MISSING_MESSAGE = "Please select a date."
DATE_INVALID_MESSAGE = "Please enter a valid date."

CandidateInput = Union[ExpenseCandidate, Mapping[str, Any]]


class ExpenseValidationError(Exception):
    """A candidate was rejected. Carries the issues that were found."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        super().__init__(
            "; ".join(issue.message for issue in self.issues) or "Invalid expense"
        )


def coerce_candidate(candidate: CandidateInput) -> ExpenseCandidate:
    """Accept either a candidate model or a plain mapping of form fields."""
    if isinstance(candidate, ExpenseCandidate):
        return candidate
    if isinstance(candidate, Mapping):
        return ExpenseCandidate.model_validate(dict(candidate))
    raise TypeError(
        f"Expected ExpenseCandidate or mapping, got {type(candidate).__name__}"
    )


def parse_amount(raw: Any) -> Optional[Decimal]:
    """Read a user-entered amount. Returns None when it is not a finite number."""
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(str(raw))
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not value.is_finite():
        return None
    return value


def parse_date(raw: Any) -> Optional[date]:
    """Read a user-entered date. Returns None when it cannot be parsed."""
    # datetime is a subclass of date, check it first
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            return None
    return None


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


class ExpenseValidator:
    """
    Turns candidates into Expense records, or explains why not.
    """

    def __init__(self, report_all_issues: Optional[bool] = None):
        """
        Initialize validator.

        Args:
            report_all_issues: Report every failing field. If None,
                taken from settings (first failure only by default).
        """
        if report_all_issues is None:
            report_all_issues = get_settings().app.report_all_validation_issues
        self._report_all = report_all_issues

    @property
    def reports_all_issues(self) -> bool:
        return self._report_all

    def _check_amount(self, candidate: ExpenseCandidate) -> tuple[Any, Optional[ValidationIssue]]:
        if _is_blank(candidate.amount):
            return None, ValidationIssue(
                field="amount",
                issue_type="missing",
                message=AMOUNT_MESSAGE,
            )

        amount = parse_amount(candidate.amount)
        if amount is None:
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=AMOUNT_MESSAGE,
            )
        if amount <= 0 or amount > MAX_AMOUNT:
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=AMOUNT_MESSAGE,
            )
        return amount, None

    def _check_text(
        self, field: str, raw: Any, message: str
    ) -> tuple[Any, Optional[ValidationIssue]]:
        if _is_blank(raw):
            return None, ValidationIssue(
                field=field,
                issue_type="missing",
                message=message,
            )
        if not isinstance(raw, str):
            return None, ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=message,
            )
        return raw.strip(), None

    def _check_category(self, candidate: ExpenseCandidate) -> tuple[Any, Optional[ValidationIssue]]:
        return self._check_text("category", candidate.category, CATEGORY_MESSAGE)

    def _check_description(self, candidate: ExpenseCandidate) -> tuple[Any, Optional[ValidationIssue]]:
        return self._check_text("description", candidate.description, DESCRIPTION_MESSAGE)

    def _check_date(self, candidate: ExpenseCandidate) -> tuple[Any, Optional[ValidationIssue]]:
        if _is_blank(candidate.expense_date):
            return None, ValidationIssue(
                field="date",
                issue_type="missing",
                message=DATE_MISSING_MESSAGE,
            )

        parsed = parse_date(candidate.expense_date)
        if parsed is None:
            return None, ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=DATE_INVALID_MESSAGE,
            )
        return parsed, None

    def validate(self, candidate: CandidateInput) -> ValidationResult:
        """
        Validate a candidate and build the Expense if it passes.

        Args:
            candidate: Raw input, as a model or a mapping of form fields

        Returns:
            ValidationResult with the new expense, or the issues found
        """
        candidate = coerce_candidate(candidate)

        checks = (
            ("amount", self._check_amount),
            ("category", self._check_category),
            ("description", self._check_description),
            ("expense_date", self._check_date),
        )

        values = {}
        issues = []

        for name, check in checks:
            value, issue = check(candidate)
            if issue is None:
                values[name] = value
                continue
            issues.append(issue)
            if not self._report_all:
                break

        if issues:
            return ValidationResult(is_valid=False, issues=issues)

        try:
            expense = Expense(**values)
        except ValidationError as e:
            # Model constraints have the final say
            issues = [
                ValidationIssue(
                    field=str(error["loc"][0]) if error["loc"] else "expense",
                    issue_type="invalid_value",
                    message=error["msg"],
                )
                for error in e.errors()
            ]
            return ValidationResult(is_valid=False, issues=issues)

        return ValidationResult(is_valid=True, expense=expense)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a user-friendly summary of a validation result.
        """
        if result.is_valid:
            return "All checks passed."

        if len(result.issues) == 1:
            return result.issues[0].message

        lines = ["Please fix the following:"]
        for issue in result.issues:
            lines.append(f"   • {issue.message}")
        return "\n".join(lines)
