"""Domain enums for qualifier evaluation.

Responsibilities:
  - Define the closed set of canonical operators and qualification outcomes.
  - Provide per-operator call metadata used by the dispatch table.

Invariants:
  - Enum values are the canonical tokens accepted in qualifier specs.
  - OPERATOR_METADATA must be complete and deterministic.
"""

from __future__ import annotations

from enum import Enum


class CanonicalOperator(Enum):
    ENABLED = "enabled"
    CHECKED = "checked"
    VALUES = "values"
    NOT = "not"
    MATCH = "match"
    NOT_MATCH = "notMatch"
    CONTAINS = "contains"
    ANY = "any"
    NOT_ANY = "not_any"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESSER_THAN = "lesser_than"
    LESSER_THAN_OR_EQUAL = "lesser_than_or_equal"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"
    EMAIL = "email"
    URL = "url"
    RANGE = "range"


class QualificationStatus(Enum):
    QUALIFIED = "QUALIFIED"
    NOT_QUALIFIED = "NOT_QUALIFIED"
    ERROR = "ERROR"


# Call metadata keyed by operator; "unpack_args" spreads a sequence argument positionally,
# extra items beyond "max_args" are dropped.
OPERATOR_METADATA: dict[CanonicalOperator, dict[str, object]] = {
    CanonicalOperator.ENABLED: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.CHECKED: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.VALUES: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.NOT: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.MATCH: {"unpack_args": False, "regex_arg": True},
    CanonicalOperator.NOT_MATCH: {"unpack_args": False, "regex_arg": True},
    CanonicalOperator.CONTAINS: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.ANY: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.NOT_ANY: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.NOT_EQUALS: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.GREATER_THAN: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.GREATER_THAN_OR_EQUAL: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.LESSER_THAN: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.LESSER_THAN_OR_EQUAL: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.EMPTY: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.NOT_EMPTY: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.EMAIL: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.URL: {"unpack_args": False, "regex_arg": False},
    CanonicalOperator.RANGE: {"unpack_args": True, "regex_arg": False, "max_args": 3},
}


def operator_from_token(token: str) -> CanonicalOperator | None:
    if not token:
        return None
    try:
        return CanonicalOperator(token)
    except ValueError:
        return None


_missing = [op for op in CanonicalOperator if op not in OPERATOR_METADATA]
if _missing:
    raise RuntimeError(f"Missing OPERATOR_METADATA for: {[m.value for m in _missing]}")
