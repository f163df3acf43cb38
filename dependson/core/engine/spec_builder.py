"""Build a QualifierSpec from a user-supplied mapping.

Responsibilities:
  - Resolve every token once and tag it as canonical, custom or unresolved.
  - Pre-compile regex arguments for match/notMatch.

Invariants:
  - Insertion order of the mapping is the evaluation order.
  - Invalid regex patterns are rejected at construction with ValueError.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from ..domain.enums import OPERATOR_METADATA
from ..domain.models import (
    CanonicalQualifier,
    CustomQualifier,
    Qualifier,
    QualifierSpec,
    UnresolvedQualifier,
)
from ..operators.aliases import resolve_operator


def _compile_regex(token: str, argument: Any) -> Any:
    if not isinstance(argument, str):
        return argument
    try:
        return re.compile(argument)
    except re.error as exc:
        raise ValueError(f"Invalid regex for qualifier '{token}': {exc}") from exc


def build_qualifier(token: str, argument: Any) -> Qualifier:
    operator = resolve_operator(token)
    if operator is None:
        if callable(argument):
            return CustomQualifier(token=token, predicate=argument)
        return UnresolvedQualifier(token=token, argument=argument)
    if OPERATOR_METADATA[operator]["regex_arg"]:
        argument = _compile_regex(token, argument)
    if isinstance(argument, list):
        argument = tuple(argument)
    return CanonicalQualifier(token=token, operator=operator, argument=argument)


def build_qualifier_spec(qualifiers: Mapping[str, Any] | QualifierSpec) -> QualifierSpec:
    if isinstance(qualifiers, QualifierSpec):
        return qualifiers
    return QualifierSpec(
        qualifiers=tuple(build_qualifier(token, argument) for token, argument in qualifiers.items())
    )
