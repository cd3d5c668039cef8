"""
Shared fixtures.

Everything runs against in-memory storage unless a test asks for
tmp_path explicitly. No test touches the real data directory.
"""

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.orchestrator import ExpenseTracker
from expense_tracker.services.export import ExpenseExporter
from expense_tracker.services.storage import InMemoryKeyValueStorage
from expense_tracker.store import ExpenseStore
from expense_tracker.validation import ExpenseValidator


SLOT_KEY = "expenseTracker"


def always_yes(prompt: str) -> bool:
    return True


def always_no(prompt: str) -> bool:
    return False


@pytest.fixture
def lunch() -> dict:
    return {
        "amount": 12.50,
        "category": "Food",
        "description": "Lunch",
        "date": "2024-01-10",
    }


@pytest.fixture
def bus() -> dict:
    return {
        "amount": 7.25,
        "category": "Transport",
        "description": "Bus",
        "date": "2024-01-11",
    }


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger(history_limit=100)


@pytest.fixture
def store(storage, audit_logger) -> ExpenseStore:
    return ExpenseStore(
        storage=storage,
        slot_key=SLOT_KEY,
        validator=ExpenseValidator(report_all_issues=False),
        audit_logger=audit_logger,
    )


@pytest.fixture
def tracker(store, audit_logger, tmp_path) -> ExpenseTracker:
    return ExpenseTracker(
        store=store,
        exporter=ExpenseExporter(tmp_path / "exports"),
        confirm=always_yes,
        audit_logger=audit_logger,
        currency_symbol="$",
    )
