"""Qualification result payload for one evaluation cycle.

Responsibilities:
  - Capture the outcome, the failing token and which qualifiers ran or were skipped.

Inputs/Outputs:
  - Inputs: produced by evaluator.evaluate_qualifiers.
  - Outputs: consumed by Dependency handles, CLIs and hosts deciding error fallback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..domain.enums import QualificationStatus
from ..domain.errors import CustomPredicateError


@dataclass
class QualificationResult:
    status: QualificationStatus
    failed_token: Optional[str] = None
    evaluated_tokens: list[str] = field(default_factory=list)
    skipped_tokens: list[str] = field(default_factory=list)
    error: Optional[CustomPredicateError] = None

    @property
    def qualified(self) -> Optional[bool]:
        if self.status == QualificationStatus.ERROR:
            return None
        return self.status == QualificationStatus.QUALIFIED
