"""
Tests for value normalization, field descriptors and the constraint evaluators
"""
from typing import Any, List, Optional, Tuple

import pytest

from record_validator.constraint_parser import ConstraintKind, parse_clause
from record_validator.errors import FailureKind, NotAStructError
from record_validator.evaluators import EVALUATORS, evaluate, membership_kind
from record_validator.field_reader import FieldDescriptor, declared_element_kind, read_fields
from record_validator.normalizer import AtomKind, Scalar, Sequence, kind_of, normalize
from sample_records import Derived, WithPrivate


def make_field(element_kind=AtomKind.OTHER, name="F"):
    return FieldDescriptor(name=name, exported=True, declared_type=Any,
                           element_kind=element_kind, spec="")


def run(clause, atoms, element_kind=AtomKind.OTHER):
    constraint, ok = parse_clause(clause)
    assert ok and constraint is not None
    return evaluate(make_field(element_kind), atoms, constraint)


class TestNormalize:
    """Scalar/Sequence wrapping."""

    def test_list_is_sequence(self):
        assert normalize([1, 2]) == Sequence((1, 2))
        assert normalize([1, 2]).atoms() == (1, 2)

    def test_tuple_is_sequence(self):
        assert normalize(("a",)).atoms() == ("a",)

    @pytest.mark.parametrize("value", ["text", 5, None, {1, 2}, {"a": 1}])
    def test_everything_else_is_scalar(self, value):
        assert normalize(value) == Scalar(value)
        assert normalize(value).atoms() == (value,)

    def test_kind_of(self):
        assert kind_of(3) is AtomKind.INTEGER
        assert kind_of("3") is AtomKind.TEXT
        assert kind_of(True) is AtomKind.OTHER
        assert kind_of(3.0) is AtomKind.OTHER


class TestFieldReader:
    """Descriptor tables for record types."""

    @pytest.mark.parametrize("declared,kind", [
        (int, AtomKind.INTEGER),
        (str, AtomKind.TEXT),
        (List[int], AtomKind.INTEGER),
        (Tuple[str, ...], AtomKind.TEXT),
        (list, AtomKind.OTHER),
        (bool, AtomKind.OTHER),
        (float, AtomKind.OTHER),
        (Optional[int], AtomKind.OTHER),
        ("int", AtomKind.OTHER),
    ])
    def test_declared_element_kind(self, declared, kind):
        assert declared_element_kind(declared) is kind

    def test_inherited_fields_come_first(self):
        assert [f.name for f in read_fields(Derived)] == ["Id", "Label"]

    def test_visibility_and_spec(self):
        fields = {f.name: f for f in read_fields(WithPrivate)}
        assert fields["Name"].exported
        assert not fields["_secret"].exported
        assert fields["_secret"].spec == "len:100"
        assert fields["_internal"].spec is None

    def test_rejects_non_dataclass(self):
        with pytest.raises(NotAStructError):
            read_fields(dict)


class TestEvaluators:
    """Per-kind evaluation over normalized atoms."""

    def test_every_kind_has_an_evaluator(self):
        assert set(EVALUATORS) == set(ConstraintKind)

    def test_length(self):
        assert run("len:2", ("ab",)) == []
        assert run("len:2", ("ab", "abc"))[0].kind == FailureKind.LENGTH

    def test_min_max_on_mixed_atoms(self):
        assert run("min:2", (5, "ab", 2.0, None)) == []
        assert run("max:2", (1, "abc"))[0].kind == FailureKind.MAXIMUM

    def test_single_failure_for_many_bad_elements(self):
        assert len(run("min:10", (1, 2, 3))) == 1

    def test_membership_with_declared_integer(self):
        failures = run("in:1,x,3", (3,), element_kind=AtomKind.INTEGER)
        assert [f.kind for f in failures] == [FailureKind.INVALID_SYNTAX]

    def test_membership_kind_mismatch_fails(self):
        failures = run("in:1,2", ("1",), element_kind=AtomKind.INTEGER)
        assert [f.kind for f in failures] == [FailureKind.MEMBERSHIP]

    def test_membership_message(self):
        failures = run("in:a,b", ("c",), element_kind=AtomKind.TEXT)
        assert failures[0].message == "field F does not occur in [a b]"

    def test_membership_skips_unsupported_atoms(self):
        assert run("in:a", (1.5, None), element_kind=AtomKind.TEXT) == []

    def test_membership_kind_falls_back_to_first_atom(self):
        assert membership_kind(make_field(), (7, 8)) is AtomKind.INTEGER
        assert membership_kind(make_field(), ()) is AtomKind.OTHER
        assert membership_kind(make_field(AtomKind.TEXT), (7,)) is AtomKind.TEXT
