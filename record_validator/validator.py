"""
Record validator.

Walks the fields of a dataclass instance, parses each field's constraint
spec and runs the matching evaluators over the field's normalized value.
All failures are collected; only a non-record input stops validation.
"""

import logging
from typing import Any, Dict, List, Optional

from .constraint_parser import Constraint, parse_spec
from .errors import (
    UNEXPORTED_FIELD_MESSAGE,
    FailureKind,
    ValidationErrors,
    ValidationFailure,
)
from .evaluators import evaluate
from .field_reader import DEFAULT_TAG_KEY, FieldDescriptor, ensure_record, read_fields, type_name
from .normalizer import normalize

logger = logging.getLogger(__name__)

_UNSET = object()


class Validator:
    """Validates dataclass records against constraint specs in field metadata."""

    def __init__(self, tag_key: str = DEFAULT_TAG_KEY):
        """
        Args:
            tag_key: Field metadata key holding the constraint spec
        """
        self.tag_key = tag_key

    def validate(self, value: Any) -> Optional[ValidationErrors]:
        """
        Validate one record.

        Args:
            value: A dataclass instance

        Returns:
            None when every constraint holds, otherwise a ValidationErrors
            holding every failure in field then clause order

        Raises:
            NotAStructError: If value is not a dataclass instance
        """
        ensure_record(value)

        failures: List[ValidationFailure] = []
        for field in read_fields(type(value), self.tag_key):
            failures.extend(self._validate_field(value, field))

        if failures:
            logger.debug(f"{type(value).__name__} failed validation with {len(failures)} errors")
            return ValidationErrors(failures)
        return None

    def _validate_field(self, record: Any, field: FieldDescriptor) -> List[ValidationFailure]:
        if not field.has_spec:
            return []

        if not field.exported:
            if field.spec == "":
                return []
            return [
                ValidationFailure(field.name, UNEXPORTED_FIELD_MESSAGE, FailureKind.UNEXPORTED_FIELD)
            ]

        failures: List[ValidationFailure] = []
        value = getattr(record, field.name, _UNSET)
        if value is _UNSET:
            # init=False field never assigned: nothing to check, syntax still reported
            logger.debug(f"Field {field.name} of {type(record).__name__} is unset")
            atoms = ()
        else:
            atoms = normalize(value).atoms()
        for item in parse_spec(field.name, field.spec):
            if isinstance(item, Constraint):
                failures.extend(evaluate(field, atoms, item))
            else:
                failures.append(item)
        return failures

    def describe(self, record_type: type) -> List[Dict[str, Any]]:
        """
        Describe the fields of a record type and their parsed constraints.

        Args:
            record_type: A dataclass class

        Returns:
            One dict per field: name, exported, declared_type, element_kind,
            spec and constraints (kind + argument). Clauses with syntax errors are
            listed under "syntax_errors" by count.

        Raises:
            NotAStructError: If record_type is not a dataclass class
        """
        result = []
        for field in read_fields(record_type, self.tag_key):
            parsed = parse_spec(field.name, field.spec) if field.has_spec else []
            constraints = [c for c in parsed if isinstance(c, Constraint)]
            result.append({
                "name": field.name,
                "exported": field.exported,
                "declared_type": type_name(field.declared_type),
                "element_kind": field.element_kind.value,
                "spec": field.spec,
                "constraints": [
                    {"kind": c.kind.value, "argument": c.raw_argument} for c in constraints
                ],
                "syntax_errors": len(parsed) - len(constraints),
            })
        return result


_default_validator = Validator()


def validate(value: Any) -> Optional[ValidationErrors]:
    """Validate a record using the default ``validate`` metadata key."""
    return _default_validator.validate(value)
