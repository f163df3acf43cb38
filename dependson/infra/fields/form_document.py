"""In-memory form: selector lookup and namespaced trigger dispatch.

Responsibilities:
  - Resolve simple selectors ("#id", ".class", "[name=x]", bare name) to elements.
  - Deliver dispatched events to handlers subscribed on matching channels.

Channel matching:
  - "change" reaches every "change.*" subscription.
  - "change.dependsOn" reaches only subscriptions carrying the dependsOn namespace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable

from dependson.app_api.ports import TriggerHandler
from .element_reader import FieldElement

_ATTR_SELECTOR = re.compile(r"""^\[name=["']?([^"'\]]+)["']?\]$""")


@dataclass(frozen=True)
class _Subscription:
    selector: str
    event: str
    namespaces: frozenset[str]
    handler: TriggerHandler


def _split_event(channel: str) -> tuple[str, frozenset[str]]:
    event, *namespaces = channel.split(".")
    return event, frozenset(n for n in namespaces if n)


class FormDocument:
    def __init__(self) -> None:
        self._elements: list[FieldElement] = []
        self._registered: dict[str, list[FieldElement]] = {}
        self._subscriptions: list[_Subscription] = []

    def add(self, *elements: FieldElement) -> None:
        self._elements.extend(elements)

    def register(self, selector: str, elements: list[FieldElement]) -> None:
        """Bind elements to an exact selector string, bypassing selector matching."""
        self.add(*elements)
        self._registered[selector] = list(elements)

    def select(self, selector: str) -> list[FieldElement]:
        if selector in self._registered:
            return list(self._registered[selector])
        matched: list[FieldElement] = []
        for part in (p.strip() for p in selector.split(",")):
            for element in self._elements:
                if _matches(element, part) and not any(element is m for m in matched):
                    matched.append(element)
        return matched

    def subscribe(self, selector: str, channel: str, handler: TriggerHandler) -> Callable[[], None]:
        created = [
            _Subscription(selector, event, namespaces, handler)
            for event, namespaces in (_split_event(c) for c in channel.split())
        ]
        self._subscriptions.extend(created)

        def unsubscribe() -> None:
            for sub in created:
                if sub in self._subscriptions:
                    self._subscriptions.remove(sub)

        return unsubscribe

    def subscription_count(self, selector: str | None = None) -> int:
        return sum(1 for s in self._subscriptions if selector is None or s.selector == selector)

    def dispatch(self, selector: str, channel: str, context: Any = None) -> int:
        """Fire channel on selector; returns the number of handlers called."""
        event, namespaces = _split_event(channel)
        targets = [
            s
            for s in self._subscriptions
            if s.selector == selector and s.event == event and namespaces <= s.namespaces
        ]
        for sub in targets:
            sub.handler(context)
        return len(targets)


def _matches(element: FieldElement, selector: str) -> bool:
    if not selector:
        return False
    if selector.startswith("#"):
        return element.id == selector[1:]
    if selector.startswith("."):
        return selector[1:] in element.classes
    attr = _ATTR_SELECTOR.match(selector)
    if attr:
        return element.name == attr.group(1)
    return element.name == selector
