"""
Verdict — The result of evaluating a contract against facts.

Public JSON shape (stable, consumed by other tools):

    {
      "status": "pass" | "fail",
      "violations": [
        {"rule": ..., "field": ..., "message": ..., "expected"?: ..., "actual"?: ...}
      ]
    }
"""

import json
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


class VerdictStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"


class Violation(BaseModel):
    """
    A single failure of one rule at one location.

    `expected` and `actual` are only reported when they were given,
    so an explicit `actual=None` (a JSON null) still shows up.
    """

    model_config = ConfigDict(frozen=True)

    rule: str = Field(..., description="Canonical rule name, e.g. required_field")
    field: str = Field(..., description="Field involved, empty for root-level checks")
    message: str = Field(..., description="Human-readable description")
    expected: Any = Field(None, description="Expected value, when the rule has one")
    actual: Any = Field(None, description="Observed value, when the rule has one")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "rule": self.rule,
            "field": self.field,
            "message": self.message,
        }
        if "expected" in self.model_fields_set:
            data["expected"] = self.expected
        if "actual" in self.model_fields_set:
            data["actual"] = self.actual
        return data


class Verdict(BaseModel):
    """Pass/fail status plus every violation, in contract rule order."""

    model_config = ConfigDict(frozen=True)

    status: VerdictStatus
    violations: tuple[Violation, ...] = Field(default_factory=tuple)

    @classmethod
    def from_violations(cls, violations: Iterable[Violation]) -> "Verdict":
        violations = tuple(violations)
        status = VerdictStatus.FAIL if violations else VerdictStatus.PASS
        return cls(status=status, violations=violations)

    @classmethod
    def failure(cls, rule: str, message: str) -> "Verdict":
        """Verdict reported when evaluation never happened (bad contract, IO error)."""
        return cls(
            status=VerdictStatus.FAIL,
            violations=(Violation(rule=rule, field="", message=message),),
        )

    @property
    def passed(self) -> bool:
        return self.status == VerdictStatus.PASS

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "violations": [v.to_dict() for v in self.violations],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
