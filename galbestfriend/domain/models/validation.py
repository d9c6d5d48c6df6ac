"""
Validation model
Outcome of the maker-checker pass over a candidate reply
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CheckResult:
    passed: bool
    status: str

    def to_dict(self) -> dict[str, Any]:
        return {"passed": self.passed, "status": self.status}


@dataclass(frozen=True)
class ValidationResult:
    """One result per check; advisory, never blocks display"""

    tone: CheckResult
    safety: CheckResult
    empathy: CheckResult
    actionable: CheckResult

    @property
    def all_passed(self) -> bool:
        return all(check.passed for check in self.checks().values())

    def checks(self) -> dict[str, CheckResult]:
        return {
            "tone": self.tone,
            "safety": self.safety,
            "empathy": self.empathy,
            "actionable": self.actionable,
        }

    def to_dict(self) -> dict[str, Any]:
        return {name: check.to_dict() for name, check in self.checks().items()}
