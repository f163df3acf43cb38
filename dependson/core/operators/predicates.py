"""Built-in qualifier predicates.

Responsibilities:
  - One pure function per CanonicalOperator, called as predicate(state, argument).
  - Absorb type mismatches locally: coercion failures degrade to False, never raise.

Inputs/Outputs:
  - Inputs: FieldState snapshot and the qualifier argument (range takes start, end, step).
  - Outputs: bool.

Invariants:
  - Equality is strict: values of different kinds never compare equal ("5" != 5, True != 1).
  - Numeric coercion follows browser Number() rules; NaN comparisons are False.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

import numpy as np

from ..domain.enums import CanonicalOperator
from ..domain.models import FieldState

Predicate = Callable[..., bool]

EMAIL_PATTERN = re.compile(
    r"^[_a-zA-Z0-9\-+]+(\.[_a-zA-Z0-9\-+]+)*@[a-zA-Z0-9\-]+(\.[a-zA-Z0-9\-]+)*"
    r"\.(([0-9]{1,3})|([a-zA-Z]{2,3})|(aero|coop|info|museum|name))$"
)
URL_PATTERN = re.compile(
    r"(((http|ftp|https)://)|www\.)[\w\-]+(\.[\w\-]+)+([\w\-.,@?^=%&:/~+#!]*[\w\-@?^=%&/~+#])?"
)

_NUMBER_BODY = r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity)"
_NUMERIC_LITERAL = re.compile(rf"^{_NUMBER_BODY}$")
_LEADING_NUMBER = re.compile(rf"^\s*({_NUMBER_BODY})")
# Unsigned only: Number("-0x1A") is NaN.
_RADIX_LITERAL = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")

STEP_TOLERANCE = 1e-9


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _as_list(value: Any) -> list:
    return list(value) if _is_sequence(value) else [value]


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if _is_sequence(value):
        return ",".join(_to_text(v) for v in value)
    return str(value)


def strict_equals(left: Any, right: Any) -> bool:
    if _is_sequence(left) or _is_sequence(right):
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    if left is None or right is None:
        return left is None and right is None
    return bool(left == right)


def _contains_strict(items: list, value: Any) -> bool:
    return any(strict_equals(item, value) for item in items)


def _same_members(observed: Any, candidate: Any) -> bool:
    members = _as_list(candidate)
    observed_items = list(observed)
    return all(_contains_strict(members, v) for v in observed_items) and all(
        _contains_strict(observed_items, m) for m in members
    )


def to_number(value: Any) -> float:
    """Coerce like Number(): absent is NaN, blank text is 0, junk is NaN.

    Text accepts decimal literals, Infinity, and unsigned 0x/0o/0b literals.
    """
    if value is None:
        return np.nan
    if isinstance(value, (bool, np.bool_)):
        return float(value)
    if isinstance(value, (int, float, np.number)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _NUMERIC_LITERAL.match(text):
            return float(text.replace("Infinity", "inf"))
        if _RADIX_LITERAL.match(text):
            return float(int(text, 0))
        return np.nan
    if _is_sequence(value):
        if len(value) == 0:
            return 0.0
        if len(value) == 1:
            return to_number(value[0])
    return np.nan


def parse_leading_number(value: Any) -> float:
    """Coerce like parseFloat(): the longest numeric prefix, else NaN."""
    if isinstance(value, (int, float, np.number)) and not isinstance(value, (bool, np.bool_)):
        return float(value)
    if value is None or isinstance(value, (bool, np.bool_)):
        return np.nan
    found = _LEADING_NUMBER.match(_to_text(value))
    if not found:
        return np.nan
    return float(found.group(1).replace("Infinity", "inf"))


def _code_point(value: Any) -> float:
    if isinstance(value, str) and value:
        return float(ord(value[0]))
    return np.nan


def _as_pattern(regex: Any) -> Optional[re.Pattern[str]]:
    if isinstance(regex, re.Pattern):
        return regex
    if isinstance(regex, str):
        try:
            return re.compile(regex)
        except re.error:
            return None
    return None


def enabled(state: FieldState, expected: Any) -> bool:
    return (not state.disabled and bool(expected)) or (state.disabled and not expected)


def checked(state: FieldState, expected: Any) -> bool:
    # Radios and other inputs always pass.
    if state.field_type != "checkbox":
        return True
    return state.checked == bool(expected)


def values(state: FieldState, whitelist: Any) -> bool:
    """True when the observed value equals a whitelist member.

    A sequence observed value (multi-select) qualifies when some member has exactly
    the same items, ignoring order: [["a", "b"], ["c"]] accepts ("b", "a").
    """
    observed = state.value
    if isinstance(whitelist, str) and isinstance(observed, str) and observed == whitelist:
        return True
    for member in _as_list(whitelist):
        if _is_sequence(observed):
            if _same_members(observed, member):
                return True
        elif strict_equals(member, observed):
            return True
    return False


def not_values(state: FieldState, blacklist: Any) -> bool:
    return not values(state, blacklist)


def match(state: FieldState, regex: Any) -> bool:
    """Every observed item must match."""
    pattern = _as_pattern(regex)
    if pattern is None:
        return False
    return all(pattern.search(_to_text(v)) is not None for v in _as_list(state.value))


def not_match(state: FieldState, regex: Any) -> bool:
    """No observed item may match."""
    pattern = _as_pattern(regex)
    if pattern is None:
        return False
    return all(pattern.search(_to_text(v)) is None for v in _as_list(state.value))


def contains(state: FieldState, whitelist: Any) -> bool:
    """Substring test on text values, membership test on sequence values.

    A scalar observed value that matched neither falls back to `values`.
    """
    observed = state.value
    if isinstance(whitelist, str):
        if isinstance(observed, str) and whitelist in observed:
            return True
    elif _is_sequence(whitelist):
        if isinstance(observed, str):
            # Absent members would be "" and match every text.
            if any(_to_text(member) in observed for member in whitelist if member is not None):
                return True
        elif _is_sequence(observed):
            if any(_contains_strict(list(observed), member) for member in whitelist):
                return True
    if not _is_sequence(observed):
        return values(state, whitelist)
    return False


def any_of(state: FieldState, whitelist: Any) -> bool:
    allowed = whitelist.split(",") if isinstance(whitelist, str) else _as_list(whitelist)
    observed = state.value
    if isinstance(observed, str):
        items = observed.split(" ")
    elif _is_sequence(observed):
        items = list(observed)
    else:
        return False
    return any(_contains_strict(allowed, item) for item in items)


def not_any(state: FieldState, whitelist: Any) -> bool:
    return not any_of(state, whitelist)


def not_equals(state: FieldState, value: Any) -> bool:
    return not strict_equals(value, state.value)


def greater_than(state: FieldState, threshold: Any) -> bool:
    return bool(to_number(state.value) > to_number(threshold))


def greater_than_or_equal(state: FieldState, threshold: Any) -> bool:
    return bool(to_number(state.value) >= to_number(threshold))


def lesser_than(state: FieldState, threshold: Any) -> bool:
    return bool(to_number(state.value) < to_number(threshold))


def lesser_than_or_equal(state: FieldState, threshold: Any) -> bool:
    return bool(to_number(state.value) <= to_number(threshold))


def empty(state: FieldState, _argument: Any = None) -> bool:
    # Exactly "", so 0 and False are not empty.
    return isinstance(state.value, str) and state.value == ""


def not_empty(state: FieldState, _argument: Any = None) -> bool:
    return not empty(state)


def email(state: FieldState, should_match: Any) -> bool:
    return strict_equals(match(state, EMAIL_PATTERN), should_match)


def url(state: FieldState, should_match: Any) -> bool:
    return strict_equals(match(state, URL_PATTERN), should_match)


def range_between(state: FieldState, start: Any = None, end: Any = None, step: Any = None) -> bool:
    """Inclusive range check over numbers, or over characters by code point.

    With a step only the discrete values start, start + step, ... up to end qualify.
    """
    if isinstance(start, str):
        low, high, observed = _code_point(start), _code_point(end), _code_point(state.value)
    else:
        low, high, observed = to_number(start), to_number(end), parse_leading_number(state.value)
    if np.isnan(low) or np.isnan(high) or np.isnan(observed):
        return False
    if not low <= observed <= high:
        return False
    if not step:
        return True

    increment = to_number(step)
    if np.isnan(increment) or increment <= 0 or not np.isfinite(low):
        return False
    k = np.rint((observed - low) / increment)
    candidate = low + k * increment
    if candidate > high + STEP_TOLERANCE:
        return False
    return bool(np.isclose(candidate, observed, rtol=0.0, atol=STEP_TOLERANCE))


PREDICATES: dict[CanonicalOperator, Predicate] = {
    CanonicalOperator.ENABLED: enabled,
    CanonicalOperator.CHECKED: checked,
    CanonicalOperator.VALUES: values,
    CanonicalOperator.NOT: not_values,
    CanonicalOperator.MATCH: match,
    CanonicalOperator.NOT_MATCH: not_match,
    CanonicalOperator.CONTAINS: contains,
    CanonicalOperator.ANY: any_of,
    CanonicalOperator.NOT_ANY: not_any,
    CanonicalOperator.NOT_EQUALS: not_equals,
    CanonicalOperator.GREATER_THAN: greater_than,
    CanonicalOperator.GREATER_THAN_OR_EQUAL: greater_than_or_equal,
    CanonicalOperator.LESSER_THAN: lesser_than,
    CanonicalOperator.LESSER_THAN_OR_EQUAL: lesser_than_or_equal,
    CanonicalOperator.EMPTY: empty,
    CanonicalOperator.NOT_EMPTY: not_empty,
    CanonicalOperator.EMAIL: email,
    CanonicalOperator.URL: url,
    CanonicalOperator.RANGE: range_between,
}

_missing = [op for op in CanonicalOperator if op not in PREDICATES]
if _missing:
    raise RuntimeError(f"Missing PREDICATES for: {[m.value for m in _missing]}")
