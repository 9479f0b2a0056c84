"""
record-validator: declarative field constraints for dataclass records

Constraints are written in dataclass field metadata and checked at runtime:

    from dataclasses import dataclass, field
    from record_validator import validate

    @dataclass
    class Applicant:
        Age: int = field(metadata={"validate": "min:18"})
        Code: str = field(metadata={"validate": "len:4;in:AAAA,BBBB"})

    errors = validate(Applicant(Age=17, Code="CCCC"))
    if errors:
        print(errors)
        # field Age has value less than min
        # field Code does not occur in [AAAA BBBB]

Spec syntax is ``name:argument`` clauses joined by ``;`` with names
``len``, ``min``, ``max`` (integer argument) and ``in`` (comma-separated
literals). List and tuple fields are checked element by element.
"""

from .api import ValidationService
from .errors import (
    ConfigError,
    FailureKind,
    NotAStructError,
    RecordTypeError,
    ValidationErrors,
    ValidationFailure,
)
from .validator import Validator, validate

__version__ = "0.1.0"
__all__ = [
    "validate",
    "Validator",
    "ValidationService",
    "ValidationErrors",
    "ValidationFailure",
    "FailureKind",
    "NotAStructError",
    "ConfigError",
    "RecordTypeError",
]
