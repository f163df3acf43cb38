"""Dependency options and trigger channel naming."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TRIGGER = "change"
DEFAULT_NAMESPACE = "dependsOn"


@dataclass(frozen=True)
class DependencyOptions:
    trigger: str = DEFAULT_TRIGGER
    namespace: str = DEFAULT_NAMESPACE

    def channel(self) -> str:
        return normalize_trigger(self.trigger, self.namespace)


def normalize_trigger(trigger: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Namespace every space-separated event: "change keyup" -> "change.dependsOn keyup.dependsOn"."""
    events = trigger.split()
    if not events:
        raise ValueError("trigger must name at least one event")
    suffix = f".{namespace}"
    normalized = []
    for event in events:
        if namespace in event.split(".")[1:]:
            normalized.append(event)
        else:
            normalized.append(event + suffix)
    return " ".join(normalized)
