"""
Field metadata reader.

Builds an explicit descriptor table for a dataclass record type: one
FieldDescriptor per field, in declaration order, base class fields first.
This is the only module that introspects record types; the evaluators only
ever see descriptors and plain values.
"""

import dataclasses
import logging
import typing
from dataclasses import dataclass
from typing import Any, List, Optional

from .errors import NotAStructError
from .normalizer import AtomKind

logger = logging.getLogger(__name__)

DEFAULT_TAG_KEY = "validate"


@dataclass(frozen=True)
class FieldDescriptor:
    """What the validator needs to know about one record field."""

    name: str
    exported: bool
    declared_type: Any
    element_kind: AtomKind
    spec: Optional[str]

    @property
    def has_spec(self) -> bool:
        return self.spec is not None


def is_record(value: Any) -> bool:
    """Return True for dataclass instances (not dataclass classes)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def ensure_record(value: Any) -> None:
    if not is_record(value):
        raise NotAStructError(value)


def read_fields(record_type: type, tag_key: str = DEFAULT_TAG_KEY) -> List[FieldDescriptor]:
    """
    Describe every field of a dataclass type.

    Args:
        record_type: A dataclass class
        tag_key: Field metadata key holding the constraint spec

    Returns:
        FieldDescriptors in declaration order

    Raises:
        NotAStructError: If record_type is not a dataclass class
    """
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise NotAStructError(record_type)

    hints = _resolve_hints(record_type)
    descriptors = []
    for f in dataclasses.fields(record_type):
        declared = hints.get(f.name, f.type)
        spec = f.metadata.get(tag_key)
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                exported=not f.name.startswith("_"),
                declared_type=declared,
                element_kind=declared_element_kind(declared),
                spec=None if spec is None else str(spec),
            )
        )

    logger.debug(f"Read {len(descriptors)} fields from {record_type.__name__}")
    return descriptors


def _resolve_hints(record_type: type) -> dict:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError) as e:
        # Forward references that cannot be resolved leave raw annotations
        logger.debug(f"Could not resolve type hints for {record_type.__name__}: {e}")
        return {}


def declared_element_kind(declared: Any) -> AtomKind:
    """
    Atomic kind declared for a field, after unwrapping list/tuple types.

    ``int`` -> INTEGER, ``str`` -> TEXT, ``list[int]`` / ``tuple[str, ...]``
    -> the element's kind. Anything else (including string annotations that
    could not be resolved) is OTHER.
    """
    origin = typing.get_origin(declared)
    if origin in (list, tuple):
        args = [a for a in typing.get_args(declared) if a is not Ellipsis]
        if not args:
            return AtomKind.OTHER
        declared = args[0]

    if declared is bool:
        return AtomKind.OTHER
    if declared is int:
        return AtomKind.INTEGER
    if declared is str:
        return AtomKind.TEXT
    return AtomKind.OTHER


def type_name(declared: Any) -> str:
    """Readable name of a declared type: ``int``, ``List[str]``, ``Optional[int]``."""
    if isinstance(declared, type) and not typing.get_args(declared):
        return declared.__name__
    return str(declared).replace("typing.", "")
