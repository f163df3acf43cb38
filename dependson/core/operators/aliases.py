"""Operator alias resolution.

Responsibilities:
  - Map historical qualifier spellings onto one CanonicalOperator.
Must not:
  - Guess; unknown tokens resolve to None and the evaluator decides the fallback.
"""

from __future__ import annotations

from ..domain.enums import CanonicalOperator, operator_from_token

ALIASES: dict[CanonicalOperator, tuple[str, ...]] = {
    CanonicalOperator.EMPTY: ("''", '""', "empty", "EMPTY"),
    CanonicalOperator.NOT_EMPTY: ("!''", '!""', "!empty", "!EMPTY", "not_empty"),
    CanonicalOperator.VALUES: ("=", "==", "===", "equals", "OR", "or", "||"),
    CanonicalOperator.NOT_EQUALS: ("!=", "!==", "!===", "!equals", "not_equals"),
    CanonicalOperator.CONTAINS: ("has", "HAS", "in", "IN"),
    CanonicalOperator.GREATER_THAN: (">", "gt"),
    CanonicalOperator.GREATER_THAN_OR_EQUAL: (">=", "gte"),
    CanonicalOperator.LESSER_THAN: ("<", "lt"),
    CanonicalOperator.LESSER_THAN_OR_EQUAL: ("<=", "lte"),
}

_ALIAS_LOOKUP: dict[str, CanonicalOperator] = {
    alias: operator for operator, aliases in ALIASES.items() for alias in aliases
}

_duplicates = [
    alias
    for alias in _ALIAS_LOOKUP
    if sum(alias in aliases for aliases in ALIASES.values()) > 1
]
if _duplicates:
    raise RuntimeError(f"Ambiguous operator aliases: {_duplicates}")


def resolve_operator(token: str) -> CanonicalOperator | None:
    operator = _ALIAS_LOOKUP.get(token)
    if operator is not None:
        return operator
    return operator_from_token(token)


def aliases_for(operator: CanonicalOperator) -> tuple[str, ...]:
    """All tokens resolving to operator, canonical name first."""
    extra = tuple(a for a in ALIASES.get(operator, ()) if a != operator.value)
    return (operator.value,) + extra
