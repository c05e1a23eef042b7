# evictiontracker/intake/schemas/intake_input_v1.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from evictiontracker.core.contracts import InMemoryCatalog
from evictiontracker.intake.constants import ID_MAX_LENGTH
from evictiontracker.intake.domain.models import (
    Account,
    CaseLedger,
    ExistingCase,
    Property,
    Tenant,
)

Identifier = constr(strip_whitespace=True, min_length=1, max_length=ID_MAX_LENGTH)


class SubmissionV1(BaseModel):
    """
    Submission = allowlist of form fields.
    Values stay raw (Any): the engine's field validators own their shape.
    """

    model_config = ConfigDict(extra="forbid")

    tenant_id: Any = None
    property_id: Any = None
    no_right_of_redemption: Any = None
    amount_owed: Any = None
    court_case_number: Any = None
    warrant_order_date: Any = None
    scheduled_eviction_date: Any = None
    signer_name: Any = None
    notice_document: Any = None


class RegionPriceV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    price: Decimal
    unlocked: bool = False


class AccountV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    landlord_id: Identifier  # type: ignore
    price_overrides: Optional[Dict[str, RegionPriceV1]] = None
    referral_code: Optional[str] = None

    def to_domain(self) -> Account:
        return Account.from_dict(self.model_dump())


class TenantV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tenant_id: Identifier  # type: ignore
    property_id: Identifier  # type: ignore
    is_subsidized: bool = False
    subsidy_type: Optional[str] = None
    rent_amount: Optional[Decimal] = None

    def to_domain(self) -> Tenant:
        return Tenant.from_dict(self.model_dump())


class PropertyV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    property_id: Identifier  # type: ignore
    region: str
    property_type: Optional[str] = None

    def to_domain(self) -> Property:
        return Property.from_dict(self.model_dump())


class ExistingCaseV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tenant_id: Identifier  # type: ignore
    payment_status: str
    status: str
    case_id: Optional[str] = None

    def to_domain(self) -> ExistingCase:
        return ExistingCase.from_dict(self.model_dump())


class IntakeEvaluateInputV1(BaseModel):
    """
    One intake attempt plus the snapshots it is decided against.
    account=None models an unauthenticated caller.
    """

    model_config = ConfigDict(extra="forbid")

    submission: SubmissionV1
    account: Optional[AccountV1] = None
    tenants: List[TenantV1] = Field(default_factory=list)
    properties: List[PropertyV1] = Field(default_factory=list)
    cases: List[ExistingCaseV1] = Field(default_factory=list)
    now: Optional[datetime] = None

    def raw_submission(self) -> Dict[str, Any]:
        return self.submission.model_dump(exclude_unset=True)

    def catalog(self) -> InMemoryCatalog:
        return InMemoryCatalog.of(
            tenants=[t.to_domain() for t in self.tenants],
            properties=[p.to_domain() for p in self.properties],
        )

    def ledger(self) -> CaseLedger:
        return CaseLedger(cases=tuple(c.to_domain() for c in self.cases))
