"""
Value normalization.

Every field value is presented to the evaluators as an ordered run of
atomic values, so a constraint written once applies to a scalar field and
to each element of a list or tuple field alike.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union


class AtomKind(Enum):
    """Kinds of atomic value the evaluators understand."""

    INTEGER = "integer"
    TEXT = "text"
    OTHER = "other"


# Ordered collections whose elements are checked one by one.
ORDERED_COLLECTIONS = (list, tuple)


def kind_of(value: Any) -> AtomKind:
    """Classify a single atomic value. ``bool`` is not an integer here."""
    if isinstance(value, bool):
        return AtomKind.OTHER
    if isinstance(value, int):
        return AtomKind.INTEGER
    if isinstance(value, str):
        return AtomKind.TEXT
    return AtomKind.OTHER


@dataclass(frozen=True)
class Scalar:
    """A field holding exactly one value."""

    value: Any

    def atoms(self) -> Tuple[Any, ...]:
        return (self.value,)


@dataclass(frozen=True)
class Sequence:
    """A field holding an ordered collection of values."""

    values: Tuple[Any, ...]

    def atoms(self) -> Tuple[Any, ...]:
        return self.values


NormalizedValue = Union[Scalar, Sequence]


def normalize(value: Any) -> NormalizedValue:
    """
    Wrap a field value as Scalar or Sequence.

    Lists and tuples expand element by element, preserving order. Strings,
    sets, mappings and everything else stay whole.
    """
    if isinstance(value, ORDERED_COLLECTIONS):
        return Sequence(tuple(value))
    return Scalar(value)
