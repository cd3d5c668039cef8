"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, storage)
2. Flow tests for the store and tracker over in-memory storage
3. No real data directory in tests (tmp_path only)
"""

import json
from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from expense_tracker.models.expense import (
    MAX_AMOUNT,
    DeleteOutcome,
    Expense,
    ExpenseCandidate,
    ValidationIssue,
    ValidationResult,
    dump_expenses,
    parse_expenses,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from expense_tracker.models.feedback import (
    CommandResult,
    MessageKind,
    UserMessage,
    escape_markdown,
)


def make_expense(**overrides) -> Expense:
    fields = {
        "amount": Decimal("12.50"),
        "category": "Food",
        "description": "Lunch",
        "date": date(2024, 1, 10),
    }
    fields.update(overrides)
    return Expense(**fields)


class TestExpenseModel:
    """Tests for the Expense record."""

    def test_expense_creation(self):
        """Test Expense creation with document field names."""
        expense = make_expense()
        assert expense.amount == Decimal("12.50")
        assert expense.category == "Food"
        assert expense.description == "Lunch"
        assert expense.expense_date == date(2024, 1, 10)

    def test_expense_creation_by_attribute_name(self):
        """Test Expense accepts Python attribute names too."""
        expense = Expense(
            amount=Decimal("3"),
            category="Other",
            description="Gum",
            expense_date=date(2024, 2, 1),
        )
        assert expense.expense_date == date(2024, 2, 1)

    def test_expense_assigns_id_and_timestamp(self):
        """Test id and createdAt are filled in at creation."""
        first = make_expense()
        second = make_expense()
        assert first.id
        assert first.id != second.id
        assert first.created_at.tzinfo is not None

    def test_expense_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        expense = make_expense(description="  Lunch  ", category=" Food ")
        assert expense.description == "Lunch"
        assert expense.category == "Food"

    def test_float_amount_keeps_its_text_value(self):
        """Test floats become the Decimal they print as."""
        expense = make_expense(amount=7.25)
        assert expense.amount == Decimal("7.25")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1"), -0.01])
    def test_expense_rejects_non_positive_amount(self, amount):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValidationError):
            make_expense(amount=amount)

    @pytest.mark.parametrize("amount", [MAX_AMOUNT + Decimal("0.01"), Decimal("1e999999999")])
    def test_expense_rejects_oversized_amount(self, amount):
        """Test that amounts above the ceiling are rejected."""
        with pytest.raises(ValidationError):
            make_expense(amount=amount)

    def test_expense_rejects_blank_description(self):
        """Test that a whitespace-only description is rejected."""
        with pytest.raises(ValidationError):
            make_expense(description="   ")

    def test_expense_rejects_empty_category(self):
        """Test that an empty category is rejected."""
        with pytest.raises(ValidationError):
            make_expense(category="")

    def test_expense_requires_date(self):
        """Test that date is required."""
        with pytest.raises(ValidationError):
            Expense(amount=Decimal("1"), category="Food", description="Tea")

    def test_expense_is_immutable(self):
        """Test that records cannot be edited."""
        expense = make_expense()
        with pytest.raises(ValidationError):
            expense.amount = Decimal("99")


class TestExpenseCandidate:
    """Tests for raw candidate input."""

    def test_candidate_allows_missing_fields(self):
        """Test an empty candidate can be built."""
        candidate = ExpenseCandidate()
        assert candidate.amount is None
        assert candidate.expense_date is None

    def test_candidate_from_form_mapping(self):
        """Test candidate reads the 'date' form field."""
        candidate = ExpenseCandidate.model_validate(
            {"amount": "5", "category": "Food", "description": "Tea", "date": "2024-01-10"}
        )
        assert candidate.expense_date == "2024-01-10"
        assert candidate.amount == "5"


class TestDocumentFormat:
    """Tests for the slot document format."""

    def test_dump_uses_document_field_names(self):
        """Test serialized field names match the stored format."""
        document = json.loads(dump_expenses([make_expense()]))
        assert set(document[0]) == {
            "id", "amount", "category", "description", "date", "createdAt",
        }
        assert document[0]["date"] == "2024-01-10"

    def test_round_trip_preserves_records_and_order(self):
        """Test parse(dump(x)) == x."""
        expenses = [
            make_expense(description="Bus", amount=Decimal("7.25")),
            make_expense(description="Lunch"),
        ]
        assert parse_expenses(dump_expenses(expenses)) == expenses

    def test_parses_browser_document(self):
        """Test documents with numeric amounts and timestamp ids load."""
        document = json.dumps([{
            "id": "1704888000000",
            "amount": 12.5,
            "category": "Food",
            "description": "Lunch",
            "date": "2024-01-10",
            "createdAt": "2024-01-10T12:00:00.000Z",
        }])
        expenses = parse_expenses(document)
        assert len(expenses) == 1
        assert expenses[0].id == "1704888000000"
        assert expenses[0].amount == Decimal("12.5")
        assert expenses[0].created_at == datetime.fromisoformat("2024-01-10T12:00:00+00:00")

    def test_empty_list_document(self):
        """Test an empty array parses to no expenses."""
        assert parse_expenses("[]") == []

    @pytest.mark.parametrize("document", [
        "{not json",
        "null",
        '{"id": "1"}',
        '[{"id": "1", "amount": -5, "category": "Food", "description": "x", "date": "2024-01-10"}]',
        '[{"id": "1", "amount": "1e999999999", "category": "Food", "description": "x", "date": "2024-01-10"}]',
    ])
    def test_rejects_invalid_documents(self, document):
        """Test malformed or invariant-breaking documents are rejected."""
        with pytest.raises(ValidationError):
            parse_expenses(document)


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_issues(self):
        """Test helper properties over issues."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Amount required",
                ),
                ValidationIssue(
                    field="date",
                    issue_type="missing",
                    message="Date required",
                ),
            ],
        )
        assert result.error_count == 2
        assert result.first_issue.field == "amount"
        assert result.messages == ["Amount required", "Date required"]

    def test_validation_result_valid(self):
        """Test a passing result has no issues."""
        result = ValidationResult(is_valid=True, expense=make_expense())
        assert result.error_count == 0
        assert result.first_issue is None


class TestFeedbackModels:
    """Tests for command outcome models."""

    def test_user_message_constructors(self):
        """Test the kind-specific constructors."""
        assert UserMessage.success("ok").kind == MessageKind.SUCCESS
        assert UserMessage.warning("hm").kind == MessageKind.WARNING
        assert UserMessage.error("no").kind == MessageKind.ERROR

    def test_command_result_has_errors(self):
        """Test has_errors only looks at error messages."""
        result = CommandResult(
            success=True,
            messages=[UserMessage.success("added"), UserMessage.error("not saved")],
        )
        assert result.has_errors is True
        assert CommandResult(success=True).has_errors is False

    @pytest.mark.parametrize("text, expected", [
        ("Lunch", "Lunch"),
        ("*bold* _it_", r"\*bold\* \_it\_"),
        ("# Rent [May]", r"\# Rent \[May\]"),
        (r"a\b", r"a\\b"),
    ])
    def test_escape_markdown(self, text, expected):
        """Test user text is escaped before markdown rendering."""
        assert escape_markdown(text) == expected

    def test_delete_outcome_values(self):
        """Test delete outcome string values."""
        assert DeleteOutcome.DELETED.value == "deleted"
        assert DeleteOutcome.NOT_FOUND.value == "not_found"
        assert DeleteOutcome.CANCELLED.value == "cancelled"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Test expense added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_id="abc",
            description="Expense deleted",
            details={"found": True},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_deleted"
        assert log_dict["entity_id"] == "abc"
        assert log_dict["details"]["found"] is True

    def test_audit_event_builder_expense_added(self):
        """Test AuditEventBuilder.expense_added."""
        event = AuditEventBuilder.expense_added(
            expense_id="e1",
            category="Food",
            amount=Decimal("12.50"),
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.entity_id == "e1"
        assert event.details["amount"] == "12.50"
        assert event.is_user_action is True

    def test_audit_event_builder_save_failed(self):
        """Test AuditEventBuilder.save_failed is an error."""
        event = AuditEventBuilder.save_failed(
            slot_key="expenseTracker",
            error_message="quota exceeded",
            count=3,
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "quota exceeded"
        assert event.details["count"] == 3

    def test_audit_event_builder_load_failed(self):
        """Test AuditEventBuilder.load_failed is a warning."""
        event = AuditEventBuilder.load_failed(
            slot_key="expenseTracker",
            error_message="corrupt",
        )
        assert event.event_type == AuditEventType.EXPENSES_LOAD_FAILED
        assert event.severity == AuditSeverity.WARNING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
