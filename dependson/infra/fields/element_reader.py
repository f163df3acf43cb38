"""In-memory form elements and a FieldStateReader over a group of them.

Responsibilities:
  - Model the observable parts of an input element.
  - Snapshot a group of elements into one FieldState.

Invariants:
  - Value is taken from the first element; radio groups use the checked radio.
  - Flags are true when any element in the group carries them.
  - Sequence values are captured as tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from dependson.core.domain.models import FieldState


@dataclass
class FieldElement:
    value: Any = ""
    type: Optional[str] = None
    checked: bool = False
    disabled: bool = False
    selected: bool = False
    id: Optional[str] = None
    name: Optional[str] = None
    classes: list[str] = field(default_factory=list)


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return value


def read_field_state(elements: Sequence[FieldElement]) -> FieldState:
    if not elements:
        return FieldState(value=None)
    first = elements[0]
    value = first.value
    if first.type == "radio":
        value = next((e.value for e in elements if e.checked), None)
    return FieldState(
        value=_freeze(value),
        checked=any(e.checked for e in elements),
        disabled=any(e.disabled for e in elements),
        selected=any(e.selected for e in elements),
        field_type=first.type,
    )


class ElementGroupReader:
    def __init__(self, elements: Sequence[FieldElement] | Callable[[], Sequence[FieldElement]]) -> None:
        self._elements = elements

    def read_state(self) -> FieldState:
        elements = self._elements() if callable(self._elements) else self._elements
        return read_field_state(elements)
