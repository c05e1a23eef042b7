from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from zoneinfo import ZoneInfo

from ..constants import CASE_TYPE_FTPR
from ..domain.models import (
    Account,
    CaseLedger,
    CaseStatus,
    PaymentStatus,
    Property,
    Tenant,
)
from ..domain.violations import Violation
from ..validators.submission import ValidatedSubmission

D = Decimal


# -----------------------------
# Output models (contract v1)
# -----------------------------


class DecisionStatus(str, Enum):
    ADMITTED = "ADMITTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class RuleTraceLineV1:
    rule_id: str
    rule_type: str
    title: str
    stage: str
    decision: str  # "APPLIED" | "SKIPPED" | "REJECTED"
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "rule_type": self.rule_type,
            "title": self.title,
            "stage": self.stage,
            "decision": self.decision,
            "meta": dict(self.meta),
        }


@dataclass(frozen=True)
class CaseDraft:
    """
    Validated, priced, not-yet-persisted FTPR case.
    Ownership passes to the caller; the engine never touches it again.
    """

    landlord_id: str
    tenant_id: str
    property_id: str
    date_initiated: date
    amount_owed: D
    price: D
    no_right_of_redemption: bool
    court_case_number: str
    warrant_order_date: date
    scheduled_eviction_date: date
    signer_name: str
    document_required: bool
    notice_document: Optional[str] = None
    case_type: str = CASE_TYPE_FTPR
    status: CaseStatus = CaseStatus.NOTICE_DRAFT
    payment_status: PaymentStatus = PaymentStatus.UNPAID

    def to_dict(self) -> Dict[str, Any]:
        return {
            "landlord_id": self.landlord_id,
            "tenant_id": self.tenant_id,
            "property_id": self.property_id,
            "case_type": self.case_type,
            "date_initiated": self.date_initiated.isoformat(),
            "amount_owed": str(self.amount_owed),
            "price": str(self.price),
            "no_right_of_redemption": self.no_right_of_redemption,
            "court_case_number": self.court_case_number,
            "warrant_order_date": self.warrant_order_date.isoformat(),
            "scheduled_eviction_date": self.scheduled_eviction_date.isoformat(),
            "signer_name": self.signer_name,
            "document_required": self.document_required,
            "notice_document": self.notice_document,
            "status": self.status.value,
            "payment_status": self.payment_status.value,
        }


@dataclass(frozen=True)
class IntakeDecision:
    status: DecisionStatus
    ruleset_version: str
    draft: Optional[CaseDraft] = None
    violations: Tuple[Violation, ...] = ()
    trace: Tuple[RuleTraceLineV1, ...] = ()

    @property
    def admitted(self) -> bool:
        return self.status == DecisionStatus.ADMITTED

    @property
    def violation_codes(self) -> Tuple[str, ...]:
        return tuple(v.code.value for v in self.violations)


# -----------------------------
# Runtime state (per call)
# -----------------------------


@dataclass
class IntakeState:
    price: D = D("0.00")
    document_required: bool = False


@dataclass
class IntakeContext:
    """
    Execution context for one decision (stateless outside this object).

    - submission: field-validated values; None only when pricing is
      checked for a submission already rejected on its fields (pricing
      rules must not read it)
    - snapshots: account, tenant, property, ledger
    - runtime: today (in `tz`)
    - state: written by pricing/eligibility rules, read at draft assembly

    tenant/prop are resolved after the cross_field stage; rules in later
    stages can rely on them being set.
    """

    submission: Optional[ValidatedSubmission]
    account: Account
    ledger: CaseLedger
    today: date
    tz: ZoneInfo
    tenant: Optional[Tenant] = None
    prop: Optional[Property] = None

    state: IntakeState = field(default_factory=IntakeState)
