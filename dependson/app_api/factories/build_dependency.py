from __future__ import annotations

from typing import Any, Mapping, Optional

from dependson.app_api.dependency import Dependency
from dependson.app_api.options import DependencyOptions
from dependson.config.qualifier_config import DependencyConfig
from dependson.core.domain.models import QualifierSpec
from dependson.infra.fields.element_reader import ElementGroupReader
from dependson.infra.fields.form_document import FormDocument


def create_dependency(
    document: FormDocument,
    observed_selector: str,
    qualifiers: QualifierSpec | Mapping[str, Any],
    trigger: Optional[str] = None,
) -> Dependency:
    options = DependencyOptions() if trigger is None else DependencyOptions(trigger=trigger)
    reader = ElementGroupReader(lambda: document.select(observed_selector))
    return Dependency(
        selector=observed_selector,
        qualifiers=qualifiers,
        reader=reader,
        trigger=options.channel(),
        trigger_source=document,
    )


def create_dependencies(document: FormDocument, configs: list[DependencyConfig]) -> list[Dependency]:
    return [
        create_dependency(document, config.selector, config.qualifiers, config.trigger)
        for config in configs
    ]
