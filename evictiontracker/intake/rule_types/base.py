from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type, TYPE_CHECKING

from ..domain.violations import ViolationCode, ViolationKind

# Decisions (avoid string typos)
DECISION_APPLIED = "APPLIED"
DECISION_SKIPPED = "SKIPPED"
DECISION_REJECTED = "REJECTED"

if TYPE_CHECKING:
    from ..engine.context import IntakeContext


class Stage(str, Enum):
    """
    Rule stages, always run in this order.
    cross_field accumulates violations; pricing and eligibility stop at the first.
    """

    CROSS_FIELD = "cross_field"
    PRICING = "pricing"
    ELIGIBILITY = "eligibility"

    @property
    def accumulates(self) -> bool:
        return self is Stage.CROSS_FIELD

    @property
    def violation_kind(self) -> ViolationKind:
        return {
            Stage.CROSS_FIELD: ViolationKind.CROSS_FIELD,
            Stage.PRICING: ViolationKind.PRICING,
            Stage.ELIGIBILITY: ViolationKind.ELIGIBILITY,
        }[self]


STAGE_ORDER = (Stage.CROSS_FIELD, Stage.PRICING, Stage.ELIGIBILITY)


@dataclass(frozen=True)
class RuleResult:
    """
    Result of applying a rule that did not reject.
    - decision: APPLIED / SKIPPED
    - meta: explainability payload for the trace.
    """

    decision: str
    meta: Dict[str, Any]

    @staticmethod
    def applied(meta: Optional[Dict[str, Any]] = None) -> "RuleResult":
        return RuleResult(decision=DECISION_APPLIED, meta=meta or {})

    @staticmethod
    def skipped(meta: Optional[Dict[str, Any]] = None) -> "RuleResult":
        return RuleResult(decision=DECISION_SKIPPED, meta=meta or {})


class RejectIntake(Exception):
    """
    Raise this from a rule to reject the submission.
    The runner turns it into a Violation whose kind follows the rule's stage.
    """

    def __init__(
        self,
        code: ViolationCode,
        message: str,
        field: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = str(message)
        self.field = field
        self.meta = meta or {}
        super().__init__(f"{self.code.value}: {self.message}")


class Rule:
    """
    Base class for all intake rules. Every rule must implement apply(ctx).

    Rules are pure over the IntakeContext snapshot; the only thing they may
    write is ctx.state (per-call scratch space).
    """

    type_name: str = "base"
    stage: Stage = Stage.ELIGIBILITY

    def __init__(self, rule_id: str, title: str, params: Dict[str, Any]):
        self.rule_id = str(rule_id)
        self.title = str(title)
        self.params = params or {}

    def apply(self, ctx: "IntakeContext") -> RuleResult:
        raise NotImplementedError


# Registry: rule_type -> Rule class
rule_registry: Dict[str, Type[Rule]] = {}


def register(rule_cls: Type[Rule]) -> Type[Rule]:
    """
    Decorator to register a rule by its type_name.
    Fails fast on duplicate registrations (useful during dev/reload).
    """
    key = getattr(rule_cls, "type_name", None)
    if not key:
        raise ValueError(f"Rule class {rule_cls.__name__} has no type_name")

    if key in rule_registry and rule_registry[key] is not rule_cls:
        raise ValueError(
            f"Duplicate rule registration for type '{key}': "
            f"{rule_registry[key].__name__} vs {rule_cls.__name__}"
        )

    rule_registry[key] = rule_cls
    return rule_cls
