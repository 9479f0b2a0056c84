"""
Constraint evaluators.

One evaluator per ConstraintKind. Each receives the field descriptor, the
normalized atoms of the field value and the parsed constraint, and returns
the failures for that clause: at most one semantic failure, however many
elements fail, because every element must pass for the field to pass.

Only integer and text atoms are checked. Atoms of any other kind (floats,
bools, None, nested containers...) are skipped by every evaluator and never
cause a failure. This permissive fallback is kept on purpose for
compatibility; it is a known limitation, not a type check.

For ``min`` and ``max`` on text atoms the compared quantity is the text's
length in characters, not its lexicographic order or a parsed number.
"""

import logging
from typing import Any, Callable, Dict, List, Sequence

from .constraint_parser import Constraint, ConstraintKind, invalid_syntax, parse_int
from .errors import FailureKind, ValidationFailure
from .field_reader import FieldDescriptor
from .normalizer import AtomKind, kind_of

logger = logging.getLogger(__name__)

Evaluator = Callable[[FieldDescriptor, Sequence[Any], Constraint], List[ValidationFailure]]


def _failure(field: FieldDescriptor, message: str, kind: FailureKind) -> List[ValidationFailure]:
    return [ValidationFailure(field.name, f"field {field.name} {message}", kind)]


def _measure(atom: Any):
    """Quantity compared by min/max: the integer itself or the text length."""
    kind = kind_of(atom)
    if kind is AtomKind.INTEGER:
        return atom
    if kind is AtomKind.TEXT:
        return len(atom)
    return None


def check_length(field: FieldDescriptor, atoms: Sequence[Any], constraint: Constraint) -> List[ValidationFailure]:
    """Every text atom must be exactly ``bound`` characters long."""
    for atom in atoms:
        if kind_of(atom) is AtomKind.TEXT and len(atom) != constraint.bound:
            return _failure(field, "has an invalid length", FailureKind.LENGTH)
    return []


def check_minimum(field: FieldDescriptor, atoms: Sequence[Any], constraint: Constraint) -> List[ValidationFailure]:
    """Every integer atom must be >= bound; every text atom must have length >= bound."""
    for atom in atoms:
        measure = _measure(atom)
        if measure is not None and measure < constraint.bound:
            return _failure(field, "has value less than min", FailureKind.MINIMUM)
    return []


def check_maximum(field: FieldDescriptor, atoms: Sequence[Any], constraint: Constraint) -> List[ValidationFailure]:
    """Every integer atom must be <= bound; every text atom must have length <= bound."""
    for atom in atoms:
        measure = _measure(atom)
        if measure is not None and measure > constraint.bound:
            return _failure(field, "has value bigger than max", FailureKind.MAXIMUM)
    return []


def membership_kind(field: FieldDescriptor, atoms: Sequence[Any]) -> AtomKind:
    """
    Kind the membership literals are parsed as.

    The field's declared element kind wins; when the declaration says
    nothing usable, the runtime kind of the first atom is used.
    """
    if field.element_kind is not AtomKind.OTHER:
        return field.element_kind
    if atoms:
        return kind_of(atoms[0])
    return AtomKind.OTHER


def check_membership(field: FieldDescriptor, atoms: Sequence[Any], constraint: Constraint) -> List[ValidationFailure]:
    """Every integer or text atom must equal one of the listed literals."""
    failures: List[ValidationFailure] = []
    literals = constraint.literals()
    kind = membership_kind(field, atoms)

    allowed = set()
    for literal in literals:
        if kind is AtomKind.INTEGER:
            number = parse_int(literal)
            if number is None:
                logger.debug(f"Literal '{literal}' on field {field.name} is not an integer")
                failures.append(invalid_syntax(field.name))
                continue
            allowed.add(number)
        elif kind is AtomKind.TEXT:
            allowed.add(literal)

    for atom in atoms:
        atom_kind = kind_of(atom)
        if atom_kind is AtomKind.OTHER:
            continue
        if atom_kind is not kind or atom not in allowed:
            failures.extend(
                _failure(field, f"does not occur in [{' '.join(literals)}]", FailureKind.MEMBERSHIP)
            )
            break

    return failures


EVALUATORS: Dict[ConstraintKind, Evaluator] = {
    ConstraintKind.LENGTH: check_length,
    ConstraintKind.MINIMUM: check_minimum,
    ConstraintKind.MAXIMUM: check_maximum,
    ConstraintKind.MEMBERSHIP: check_membership,
}

_missing = set(ConstraintKind) - set(EVALUATORS)
if _missing:
    raise RuntimeError(f"No evaluator registered for {sorted(k.value for k in _missing)}")


def evaluate(field: FieldDescriptor, atoms: Sequence[Any], constraint: Constraint) -> List[ValidationFailure]:
    """Run the evaluator matching constraint.kind."""
    return EVALUATORS[constraint.kind](field, atoms, constraint)
