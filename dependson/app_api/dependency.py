"""Live dependency binding: field reader + qualifier spec + trigger channel.

Responsibilities:
  - Evaluate once at construction to set the baseline (no notification).
  - Re-read field state and re-evaluate on every trigger or run_check call.
  - Notify subscribers on qualification transitions only.

Invariants:
  - Owns its FieldState snapshot and previous-result flag exclusively.
  - The stored flag is swapped only after the whole qualifier set has run.
  - An ERROR result leaves the flag unchanged and emits nothing.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from dependson.core.domain.models import FieldState, Notification, QualifierSpec
from dependson.core.engine.evaluator import emit_debug, evaluate_qualifiers
from dependson.core.engine.notifier import ChangeNotifier, Subscriber
from dependson.core.engine.result import QualificationResult
from dependson.core.engine.spec_builder import build_qualifier_spec
from .ports import FieldStateReader, TriggerSource


class Dependency:
    def __init__(
        self,
        selector: str,
        qualifiers: QualifierSpec | Mapping[str, Any],
        reader: FieldStateReader,
        trigger: str,
        trigger_source: Optional[TriggerSource] = None,
    ) -> None:
        self._selector = selector
        self._spec = build_qualifier_spec(qualifiers)
        self._reader = reader
        self._trigger = trigger
        self._field_state = reader.read_state()
        self._last_result = evaluate_qualifiers(self._spec, self._field_state)
        baseline = bool(self._last_result.qualified)
        self._notifier = ChangeNotifier(selector, baseline)
        self._unsubscribe_trigger: Optional[Callable[[], None]] = None
        if trigger_source is not None:
            self._unsubscribe_trigger = trigger_source.subscribe(selector, trigger, self.run_check)

    @property
    def selector(self) -> str:
        return self._selector

    @property
    def trigger(self) -> str:
        return self._trigger

    @property
    def qualifiers(self) -> QualifierSpec:
        return self._spec

    @property
    def qualified(self) -> bool:
        return self._notifier.qualified

    @property
    def field_state(self) -> FieldState:
        return self._field_state

    @property
    def last_result(self) -> QualificationResult:
        return self._last_result

    @property
    def active(self) -> bool:
        return self._unsubscribe_trigger is not None

    def subscribe(self, callback: Subscriber) -> None:
        self._notifier.subscribe(callback)

    def unsubscribe(self, callback: Subscriber) -> bool:
        return self._notifier.unsubscribe(callback)

    def run_check(self, trigger_context: Any = None) -> Optional[Notification]:
        state = self._reader.read_state()
        result = evaluate_qualifiers(self._spec, state)
        self._field_state = state
        self._last_result = result
        if result.qualified is None:
            emit_debug(
                f"QUALIFICATION_ERROR selector={self._selector} token={result.failed_token!r} "
                f"kept_qualified={self._notifier.qualified}"
            )
            return None
        return self._notifier.update(result.qualified, trigger_context)

    def close(self) -> None:
        if self._unsubscribe_trigger is not None:
            self._unsubscribe_trigger()
            self._unsubscribe_trigger = None
