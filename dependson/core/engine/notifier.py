"""Qualification change tracking and publication.

Responsibilities:
  - Hold the previous qualified flag for one dependency.
  - Publish a Notification to owned subscribers only when the flag flips.

Invariants:
  - The stored flag is replaced before subscribers run, so a re-entrant check
    from a subscriber compares against the new value.
  - Subscribers are called in subscription order.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..domain.models import Notification
from .evaluator import emit_debug

Subscriber = Callable[[Notification], None]


class ChangeNotifier:
    def __init__(self, selector: str, initial_qualified: bool) -> None:
        self._selector = selector
        self._previous = initial_qualified
        self._subscribers: list[Subscriber] = []

    @property
    def qualified(self) -> bool:
        return self._previous

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> bool:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            return False
        return True

    def update(self, new_qualified: bool, trigger_context: Any = None) -> Optional[Notification]:
        if new_qualified == self._previous:
            return None
        self._previous = new_qualified
        notification = Notification(
            selector=self._selector,
            trigger_context=trigger_context,
            qualified=new_qualified,
        )
        emit_debug(f"QUALIFICATION_CHANGED selector={self._selector} qualified={new_qualified}")
        for callback in list(self._subscribers):
            callback(notification)
        return notification
