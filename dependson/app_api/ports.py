"""Port definitions for host-supplied collaborators.

Responsibilities:
  - Define interface contracts for reading field state and delivering triggers.
Must not:
  - Implement logic; interfaces only.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from dependson.core.domain.models import FieldState

TriggerHandler = Callable[[Any], None]


class FieldStateReader(Protocol):
    def read_state(self) -> FieldState:
        ...


class TriggerSource(Protocol):
    def subscribe(self, selector: str, channel: str, handler: TriggerHandler) -> Callable[[], None]:
        ...
