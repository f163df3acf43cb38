from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dependson.core.domain.models import QualifierSpec
from dependson.core.engine.spec_builder import build_qualifier_spec
from dependson.infra.fields.element_reader import FieldElement

_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}
_ELEMENT_FIELDS = {"value", "type", "checked", "disabled", "selected", "id", "name", "classes"}


@dataclass(frozen=True)
class DependencyConfig:
    selector: str
    qualifiers: QualifierSpec
    trigger: Optional[str] = None


def _require(payload: dict[str, Any], key: str, expected_type: type, where: str) -> Any:
    if key not in payload:
        raise ValueError(f"Missing required field '{key}' in {where}")
    value = payload[key]
    if not isinstance(value, expected_type):
        raise ValueError(f"Field '{key}' in {where} must be {expected_type.__name__}")
    return value


def _read_json_object(path: Path | str) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"Config file not found: {config_path}")
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {config_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Config must be a JSON object")
    return payload


def decode_argument(argument: Any) -> Any:
    """JSON has no regex literal; {"regex": "...", "flags": "i"} stands for one."""
    if isinstance(argument, dict):
        if "regex" not in argument:
            raise ValueError(f"Object argument must carry 'regex': {argument}")
        pattern = argument["regex"]
        if not isinstance(pattern, str):
            raise ValueError("Field 'regex' must be str")
        flags = 0
        for letter in argument.get("flags", ""):
            if letter not in _REGEX_FLAGS:
                raise ValueError(f"Unsupported regex flag: {letter!r}")
            flags |= _REGEX_FLAGS[letter]
        try:
            return re.compile(pattern, flags)
        except re.error as exc:
            raise ValueError(f"Invalid regex {pattern!r}: {exc}") from exc
    return argument


def parse_dependency(entry: Any, index: int) -> DependencyConfig:
    where = f"dependencies[{index}]"
    if not isinstance(entry, dict):
        raise ValueError(f"{where} must be a JSON object")
    selector = _require(entry, "selector", str, where)
    raw_qualifiers = _require(entry, "qualifiers", dict, where)
    trigger = entry.get("trigger")
    if trigger is not None and not isinstance(trigger, str):
        raise ValueError(f"Field 'trigger' in {where} must be str")
    qualifiers = build_qualifier_spec(
        {token: decode_argument(argument) for token, argument in raw_qualifiers.items()}
    )
    return DependencyConfig(selector=selector, qualifiers=qualifiers, trigger=trigger)


def load_dependency_config(path: Path | str) -> list[DependencyConfig]:
    payload = _read_json_object(path)
    entries = _require(payload, "dependencies", list, "config")
    return [parse_dependency(entry, i) for i, entry in enumerate(entries)]


def load_field_elements(path: Path | str) -> dict[str, list[FieldElement]]:
    payload = _read_json_object(path)
    fields = _require(payload, "fields", dict, "fields file")
    result: dict[str, list[FieldElement]] = {}
    for selector, raw_elements in fields.items():
        if isinstance(raw_elements, dict):
            raw_elements = [raw_elements]
        if not isinstance(raw_elements, list):
            raise ValueError(f"fields[{selector!r}] must be an object or a list of objects")
        elements = []
        for raw in raw_elements:
            if not isinstance(raw, dict):
                raise ValueError(f"fields[{selector!r}] entries must be objects")
            unknown = set(raw) - _ELEMENT_FIELDS
            if unknown:
                raise ValueError(f"Unknown element fields for {selector!r}: {sorted(unknown)}")
            elements.append(FieldElement(**raw))
        result[selector] = elements
    return result
