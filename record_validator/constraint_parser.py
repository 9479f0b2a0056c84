"""
Constraint spec parser.

A spec is a ``;``-separated list of ``name:argument`` clauses, e.g.
``"len:4;in:AAAA,BBBB"``. Syntax problems are reported per clause and do
not stop the remaining clauses from being parsed.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from .errors import INVALID_SYNTAX_MESSAGE, FailureKind, ValidationFailure

logger = logging.getLogger(__name__)

CLAUSE_SEPARATOR = ";"
ARGUMENT_SEPARATOR = ":"
LITERAL_SEPARATOR = ","

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ConstraintKind(Enum):
    """The closed set of constraint kinds, keyed by their spec name."""

    LENGTH = "len"
    MINIMUM = "min"
    MAXIMUM = "max"
    MEMBERSHIP = "in"

    @property
    def takes_integer(self) -> bool:
        return self is not ConstraintKind.MEMBERSHIP


@dataclass(frozen=True)
class Constraint:
    """One parsed clause."""

    kind: ConstraintKind
    raw_argument: str
    bound: Optional[int] = None

    def literals(self) -> List[str]:
        """Split a membership argument into its raw literals."""
        return self.raw_argument.split(LITERAL_SEPARATOR)


def parse_int(text: str) -> Optional[int]:
    """Parse a decimal integer with an optional sign; None if malformed."""
    if _INTEGER.fullmatch(text) is None:
        return None
    return int(text)


def invalid_syntax(field_name: str) -> ValidationFailure:
    return ValidationFailure(field_name, INVALID_SYNTAX_MESSAGE, FailureKind.INVALID_SYNTAX)


def parse_clause(clause: str) -> Tuple[Optional[Constraint], bool]:
    """
    Parse a single clause.

    Returns:
        Tuple of (constraint, ok). ok is False for a syntax error; constraint
        is None for syntax errors and for unknown constraint names.
    """
    name, sep, argument = clause.partition(ARGUMENT_SEPARATOR)
    if not sep:
        return None, False

    try:
        kind = ConstraintKind(name)
    except ValueError:
        logger.warning(f"Ignoring unknown constraint '{name}' in clause '{clause}'")
        return None, True

    if kind.takes_integer:
        bound = parse_int(argument)
        if bound is None:
            return None, False
        return Constraint(kind, argument, bound), True

    return Constraint(kind, argument), True


def parse_spec(field_name: str, spec: str) -> List[Union[Constraint, ValidationFailure]]:
    """
    Parse a field's whole constraint spec.

    Args:
        field_name: Field the spec belongs to (used in failures)
        spec: Raw spec text

    Returns:
        One entry per clause, in clause order: a Constraint, or an
        InvalidSyntax ValidationFailure. Unknown constraint names produce
        no entry.
    """
    parsed: List[Union[Constraint, ValidationFailure]] = []
    if spec == "":
        return parsed

    for clause in spec.split(CLAUSE_SEPARATOR):
        constraint, ok = parse_clause(clause)
        if not ok:
            logger.debug(f"Invalid clause '{clause}' on field {field_name}")
            parsed.append(invalid_syntax(field_name))
        elif constraint is not None:
            parsed.append(constraint)

    return parsed
