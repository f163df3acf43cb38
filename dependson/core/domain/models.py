"""Domain models for field state and qualifier specs.

Responsibilities:
  - Define immutable carriers for observed field state, qualifiers and notifications.

Inputs/Outputs:
  - FieldState is produced by FieldStateReader implementations.
  - QualifierSpec is produced by engine.spec_builder and consumed by the evaluator.

Invariants:
  - Models must be deterministic containers with no behavior.
  - FieldState sequences are tuples; a snapshot is never mutated after capture.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .enums import CanonicalOperator

FieldValue = Union[str, int, float, bool, tuple, None]


@dataclass(frozen=True)
class FieldState:
    value: FieldValue
    checked: bool = False
    disabled: bool = False
    selected: bool = False
    field_type: Optional[str] = None


@dataclass(frozen=True)
class CanonicalQualifier:
    token: str
    operator: CanonicalOperator
    argument: Any


@dataclass(frozen=True)
class CustomQualifier:
    token: str
    predicate: Callable[[Any], bool]


@dataclass(frozen=True)
class UnresolvedQualifier:
    token: str
    argument: Any


Qualifier = Union[CanonicalQualifier, CustomQualifier, UnresolvedQualifier]


@dataclass(frozen=True)
class QualifierSpec:
    """Ordered qualifiers, AND-combined left to right."""
    qualifiers: tuple[Qualifier, ...]

    def tokens(self) -> list[str]:
        return [q.token for q in self.qualifiers]


@dataclass(frozen=True)
class Notification:
    selector: str
    trigger_context: Any
    qualified: bool
