"""
User Feedback Models

Outcomes of tracker commands, shaped for whatever presentation layer
renders them (Streamlit page, CLI, test harness).
"""

import re
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from expense_tracker.models.expense import Expense, ValidationIssue


_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|>~<$])")


def escape_markdown(text: str) -> str:
    """Backslash-escape markdown syntax so user text renders literally."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


class MessageKind(str, Enum):
    """How a message should be presented."""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class UserMessage(BaseModel):
    """A transient message for the user."""

    kind: MessageKind
    text: str = Field(..., min_length=1)

    @classmethod
    def success(cls, text: str) -> "UserMessage":
        return cls(kind=MessageKind.SUCCESS, text=text)

    @classmethod
    def warning(cls, text: str) -> "UserMessage":
        return cls(kind=MessageKind.WARNING, text=text)

    @classmethod
    def error(cls, text: str) -> "UserMessage":
        return cls(kind=MessageKind.ERROR, text=text)


class CommandResult(BaseModel):
    """
    Result of one tracker command.

    success reports whether the command did what was asked.
    A command can succeed and still carry an error message,
    e.g. an expense accepted in memory that could not be saved.
    """

    success: bool
    messages: list[UserMessage] = Field(default_factory=list)
    expense: Optional[Expense] = None
    issues: list[ValidationIssue] = Field(default_factory=list)
    export_path: Optional[Path] = None

    @property
    def has_errors(self) -> bool:
        return any(message.kind == MessageKind.ERROR for message in self.messages)
