"""Qualifier evaluation against a single FieldState snapshot.

Responsibilities:
  - Run qualifiers left to right, AND-combined, stopping at the first failure.
  - Dispatch canonical qualifiers through the predicate table.
  - Surface custom-predicate failures as an ERROR result instead of True/False.

Inputs/Outputs:
  - Inputs: QualifierSpec (or a plain mapping) and a FieldState.
  - Outputs: QualificationResult.

Invariants:
  - Pure given (spec, state); no state is kept between calls.
  - Unresolved tokens with non-callable arguments are skipped and always pass.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

import numpy as np

from ..domain.enums import OPERATOR_METADATA, QualificationStatus
from ..domain.errors import CustomPredicateError
from ..domain.models import (
    CanonicalQualifier,
    CustomQualifier,
    FieldState,
    QualifierSpec,
    UnresolvedQualifier,
)
from ..operators.predicates import PREDICATES, _is_sequence
from .result import QualificationResult
from .spec_builder import build_qualifier_spec

_DEBUG_FN: Callable[[str], None] | None = None


def set_evaluator_debug(fn: Callable[[str], None] | None) -> None:
    global _DEBUG_FN
    _DEBUG_FN = fn


def emit_debug(message: str) -> None:
    if _DEBUG_FN is not None:
        _DEBUG_FN(message)


def _run_canonical(qualifier: CanonicalQualifier, state: FieldState) -> bool:
    predicate = PREDICATES[qualifier.operator]
    metadata = OPERATOR_METADATA[qualifier.operator]
    if metadata["unpack_args"]:
        if not _is_sequence(qualifier.argument):
            return False
        arguments = tuple(qualifier.argument)
        max_args = metadata.get("max_args")
        if max_args is not None:
            arguments = arguments[:max_args]
        return bool(predicate(state, *arguments))
    return bool(predicate(state, qualifier.argument))


def _run_custom(qualifier: CustomQualifier, state: FieldState) -> bool:
    try:
        outcome = qualifier.predicate(state.value)
    except Exception as exc:
        raise CustomPredicateError(qualifier.token, f"raised {type(exc).__name__}: {exc}") from exc
    if not isinstance(outcome, (bool, np.bool_)):
        raise CustomPredicateError(
            qualifier.token, f"returned {type(outcome).__name__}, expected bool"
        )
    return bool(outcome)


def evaluate_qualifiers(
    qualifiers: QualifierSpec | Mapping[str, Any],
    state: FieldState,
) -> QualificationResult:
    spec = build_qualifier_spec(qualifiers)
    evaluated: list[str] = []
    skipped: list[str] = []

    for qualifier in spec.qualifiers:
        if isinstance(qualifier, UnresolvedQualifier):
            skipped.append(qualifier.token)
            emit_debug(f"QUALIFIER_SKIPPED token={qualifier.token!r} reason=UNRESOLVED_OPERATOR")
            continue

        evaluated.append(qualifier.token)
        if isinstance(qualifier, CustomQualifier):
            try:
                passed = _run_custom(qualifier, state)
            except CustomPredicateError as exc:
                emit_debug(f"QUALIFIER_ERROR token={qualifier.token!r} error={exc}")
                return QualificationResult(
                    status=QualificationStatus.ERROR,
                    failed_token=qualifier.token,
                    evaluated_tokens=evaluated,
                    skipped_tokens=skipped,
                    error=exc,
                )
        else:
            passed = _run_canonical(qualifier, state)

        if not passed:
            return QualificationResult(
                status=QualificationStatus.NOT_QUALIFIED,
                failed_token=qualifier.token,
                evaluated_tokens=evaluated,
                skipped_tokens=skipped,
            )

    return QualificationResult(
        status=QualificationStatus.QUALIFIED,
        evaluated_tokens=evaluated,
        skipped_tokens=skipped,
    )


def does_qualify(qualifiers: QualifierSpec | Mapping[str, Any], state: FieldState) -> bool:
    """Boolean view of evaluate_qualifiers; raises CustomPredicateError on ERROR."""
    result = evaluate_qualifiers(qualifiers, state)
    if result.error is not None:
        raise result.error
    return result.status == QualificationStatus.QUALIFIED
