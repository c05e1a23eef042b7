# evictiontracker/intake/schemas/intake_output_v1.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from evictiontracker.intake.engine.context import IntakeDecision


class ViolationV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None
    code: str
    kind: str
    message: str


class IntakeDecisionOutputV1(BaseModel):
    """
    Top-level fields are strict. The draft and trace go out as plain dicts,
    exactly as CaseDraft.to_dict / RuleTraceLineV1.to_dict render them.
    """

    model_config = ConfigDict(extra="forbid")

    version: Literal["v1"] = "v1"
    ruleset_version: str
    status: Literal["admitted", "rejected"]
    draft: Optional[Dict[str, Any]] = None
    violations: List[ViolationV1] = []
    trace: List[Dict[str, Any]] = []

    @classmethod
    def from_decision(cls, decision: IntakeDecision) -> "IntakeDecisionOutputV1":
        return cls(
            ruleset_version=decision.ruleset_version,
            status="admitted" if decision.admitted else "rejected",
            draft=decision.draft.to_dict() if decision.draft is not None else None,
            violations=[ViolationV1(**v.to_dict()) for v in decision.violations],
            trace=[line.to_dict() for line in decision.trace],
        )


class RuleSummaryV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    type: str
    title: str
    stage: str
    enabled: bool
    params: Dict[str, Any] = {}


class RuleSetOutputV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: Literal["v1"] = "v1"
    ruleset_version: str
    rules: List[RuleSummaryV1]
