"""Tests for qualifier evaluation, short-circuiting and custom predicates."""

from __future__ import annotations

import re

import numpy as np
import pytest

from dependson.core.domain.enums import CanonicalOperator, QualificationStatus
from dependson.core.domain.errors import CustomPredicateError
from dependson.core.domain.models import (
    CanonicalQualifier,
    CustomQualifier,
    FieldState,
    UnresolvedQualifier,
)
from dependson.core.engine.evaluator import (
    does_qualify,
    evaluate_qualifiers,
    set_evaluator_debug,
)
from dependson.core.engine.spec_builder import build_qualifier_spec


class CountingPredicate:
    def __init__(self, outcome) -> None:
        self.outcome = outcome
        self.calls: list = []

    def __call__(self, value):
        self.calls.append(value)
        return self.outcome


def test_values_scenario():
    spec = {"values": "yes"}
    assert does_qualify(spec, FieldState(value="yes")) is True
    assert does_qualify(spec, FieldState(value="no")) is False


def test_contains_scenario():
    assert does_qualify({"contains": ["a", "b"]}, FieldState(value=("a", "c"))) is True


def test_range_argument_is_unpacked():
    assert does_qualify({"range": [1, 5]}, FieldState(value="3")) is True
    assert does_qualify({"range": [1, 5]}, FieldState(value="6")) is False
    assert does_qualify({"range": [1, 10, 2]}, FieldState(value="5")) is True


def test_range_scalar_argument_is_false():
    assert does_qualify({"range": 5}, FieldState(value="5")) is False


def test_greater_than_scenario():
    assert does_qualify({"greater_than": "10"}, FieldState(value="3")) is False
    assert does_qualify({">": "10"}, FieldState(value="15")) is True


def test_first_failure_reports_token():
    state = FieldState(value="", disabled=True)
    result = evaluate_qualifiers({"enabled": True, "not_empty": True}, state)
    assert result.status == QualificationStatus.NOT_QUALIFIED
    assert result.failed_token == "enabled"
    assert result.evaluated_tokens == ["enabled"]
    assert result.qualified is False


def test_short_circuit_skips_later_qualifiers():
    later = CountingPredicate(True)
    result = evaluate_qualifiers({"values": ["x"], "laterCheck": later}, FieldState(value="y"))
    assert result.qualified is False
    assert later.calls == []


def test_custom_predicate_receives_raw_value():
    custom = CountingPredicate(True)
    assert does_qualify({"customCheck": custom}, FieldState(value="x", checked=True)) is True
    assert custom.calls == ["x"]


def test_custom_predicate_scenario():
    spec = {"customCheck": lambda value: value == "x"}
    assert does_qualify(spec, FieldState(value="x")) is True
    assert does_qualify(spec, FieldState(value="y")) is False


def test_custom_predicate_numpy_bool_is_accepted():
    assert does_qualify({"isPositive": lambda v: np.float64(v) > 0}, FieldState(value=3.0)) is True


def test_unresolved_non_callable_is_skipped():
    result = evaluate_qualifiers({"unknownOp": 42, "values": "a"}, FieldState(value="a"))
    assert result.status == QualificationStatus.QUALIFIED
    assert result.skipped_tokens == ["unknownOp"]
    assert result.evaluated_tokens == ["values"]


def test_empty_spec_qualifies():
    assert evaluate_qualifiers({}, FieldState(value=None)).qualified is True


def test_custom_predicate_raising_is_error():
    def broken(value):
        raise KeyError("boom")

    result = evaluate_qualifiers({"broken": broken}, FieldState(value="x"))
    assert result.status == QualificationStatus.ERROR
    assert result.qualified is None
    assert result.failed_token == "broken"
    assert isinstance(result.error, CustomPredicateError)
    assert isinstance(result.error.__cause__, KeyError)


def test_custom_predicate_non_bool_is_error():
    result = evaluate_qualifiers({"truthy": lambda v: "yes"}, FieldState(value="x"))
    assert result.status == QualificationStatus.ERROR
    with pytest.raises(CustomPredicateError):
        does_qualify({"truthy": lambda v: 1}, FieldState(value="x"))


def test_error_after_failure_is_not_reached():
    result = evaluate_qualifiers(
        {"empty": True, "broken": lambda v: None}, FieldState(value="filled")
    )
    assert result.status == QualificationStatus.NOT_QUALIFIED


def test_spec_builder_tags_variants_once():
    custom = CountingPredicate(True)
    spec = build_qualifier_spec({"==": ["a"], "match": "^a", "mine": custom, "odd": "x"})
    kinds = [type(q) for q in spec.qualifiers]
    assert kinds == [CanonicalQualifier, CanonicalQualifier, CustomQualifier, UnresolvedQualifier]
    assert spec.qualifiers[0].operator == CanonicalOperator.VALUES
    assert spec.qualifiers[0].argument == ("a",)
    assert isinstance(spec.qualifiers[1].argument, re.Pattern)
    assert spec.tokens() == ["==", "match", "mine", "odd"]
    assert build_qualifier_spec(spec) is spec


def test_spec_builder_rejects_bad_regex():
    with pytest.raises(ValueError):
        build_qualifier_spec({"notMatch": "(unclosed"})


def test_debug_hook_reports_skips():
    messages: list[str] = []
    set_evaluator_debug(messages.append)
    try:
        evaluate_qualifiers({"mystery": 1}, FieldState(value=""))
    finally:
        set_evaluator_debug(None)
    assert any("QUALIFIER_SKIPPED" in m and "mystery" in m for m in messages)


def test_evaluation_is_idempotent():
    spec = build_qualifier_spec({"not_empty": True, "lt": 10})
    state = FieldState(value="4")
    first = evaluate_qualifiers(spec, state)
    second = evaluate_qualifiers(spec, state)
    assert first == second


def test_range_extra_arguments_are_ignored():
    assert does_qualify({"range": [1, 5, 1, 9]}, FieldState(value="3")) is True
    assert does_qualify({"range": [1, 5, 2, 9, 9]}, FieldState(value="4")) is False
    assert evaluate_qualifiers({"range": [1, 5, 1, 9]}, FieldState(value="7")).qualified is False
