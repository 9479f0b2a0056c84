"""Failure and error types raised or returned by record-validator."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List


INVALID_SYNTAX_MESSAGE = "invalid validator syntax"
UNEXPORTED_FIELD_MESSAGE = "validation for unexported field is not allowed"
NOT_A_STRUCT_MESSAGE = "wrong argument given, should be a struct"


class NotAStructError(TypeError):
    """Raised when the value handed to validate() is not a dataclass instance."""

    def __init__(self, value=None):
        super().__init__(NOT_A_STRUCT_MESSAGE)
        self.value_type = type(value).__name__


class ConfigError(ValueError):
    """Configuration file is missing, unreadable or does not match its schema."""


class RecordTypeError(LookupError):
    """A registered record type cannot be resolved or instantiated."""


class FailureKind(str, Enum):
    """Category of a single validation failure."""

    UNEXPORTED_FIELD = "unexported_field"
    INVALID_SYNTAX = "invalid_syntax"
    LENGTH = "len"
    MINIMUM = "min"
    MAXIMUM = "max"
    MEMBERSHIP = "in"


@dataclass(frozen=True)
class ValidationFailure:
    """One violation found on one field."""

    field: str
    message: str
    kind: FailureKind

    def to_dict(self) -> dict:
        return {"field": self.field, "kind": self.kind.value, "message": self.message}


class ValidationErrors(Exception):
    """
    Ordered aggregate of every failure found in one validate() call.

    Behaves as an exception (so callers may raise it) and as a read-only
    sequence of ValidationFailure. The rendered form joins the individual
    messages with newlines, in field declaration order then clause order.
    """

    def __init__(self, failures: Iterable[ValidationFailure] = ()):
        self.failures: List[ValidationFailure] = list(failures)
        super().__init__(self.failures)

    def __str__(self) -> str:
        return "\n".join(self.messages())

    def __repr__(self) -> str:
        return f"ValidationErrors({self.failures!r})"

    def __len__(self) -> int:
        return len(self.failures)

    def __iter__(self) -> Iterator[ValidationFailure]:
        return iter(self.failures)

    def __getitem__(self, index):
        return self.failures[index]

    def __bool__(self) -> bool:
        return bool(self.failures)

    def messages(self) -> List[str]:
        """Return the failure messages in order."""
        return [f.message for f in self.failures]

    def by_field(self, name: str) -> List[ValidationFailure]:
        """Return the failures recorded against one field."""
        return [f for f in self.failures if f.field == name]

    def to_list(self) -> List[dict]:
        return [f.to_dict() for f in self.failures]
