"""
FTPR submission field table.

Field names are the snake_case keys accepted from the intake form. Record-level
rules (amount vs. waiver, eviction lead time) are rule types, not field rules:
see rule_types/amount_owed.py and rule_types/eviction_lead_time.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Final, List, Mapping, Optional, Tuple

from evictiontracker.intake.constants import ID_MAX_LENGTH
from evictiontracker.intake.domain.violations import Violation
from evictiontracker.intake.validators.fields import FieldKind, FieldRule, validate, validate_record

D = Decimal

FTPR_FIELD_RULES: Final[Dict[str, FieldRule]] = {
    "tenant_id": FieldRule(FieldKind.IDENTIFIER, "Tenant selection", required=True, max_length=ID_MAX_LENGTH),
    "property_id": FieldRule(FieldKind.IDENTIFIER, "Property selection", max_length=ID_MAX_LENGTH),
    "no_right_of_redemption": FieldRule(
        FieldKind.FLAG, "No Right of Redemption", default=False
    ),
    # Must follow the waiver flag: skipped entirely when the flag is set.
    "amount_owed": FieldRule(
        FieldKind.AMOUNT,
        "Amount Due to Redeem the Property",
        min_value=D("0"),
        skip_when="no_right_of_redemption",
    ),
    "court_case_number": FieldRule(
        FieldKind.TEXT, "District Court Case Number", required=True, max_length=100
    ),
    "warrant_order_date": FieldRule(
        FieldKind.DATE, "Date Warrant Was Ordered by Court", required=True
    ),
    "scheduled_eviction_date": FieldRule(
        FieldKind.DATE, "Initial Scheduled Date of Eviction", required=True
    ),
    "signer_name": FieldRule(FieldKind.TEXT, "Signature", required=True, max_length=100),
    "notice_document": FieldRule(FieldKind.REFERENCE, "30-day notice", max_length=255),
}


@dataclass(frozen=True)
class ValidatedSubmission:
    """Normalised submission: only exists once every field rule passed."""

    tenant_id: str
    court_case_number: str
    warrant_order_date: date
    scheduled_eviction_date: date
    signer_name: str
    no_right_of_redemption: bool = False
    amount_owed: Optional[D] = None
    property_id: Optional[str] = None
    notice_document: Optional[str] = None


def validate_submission(
    raw: Mapping[str, Any],
    rules: Mapping[str, FieldRule] = FTPR_FIELD_RULES,
) -> Tuple[Optional[ValidatedSubmission], List[Violation]]:
    if not isinstance(raw, Mapping):
        raw = {}

    values, violations = validate_record(raw, rules)
    if violations:
        return None, violations

    return ValidatedSubmission(**values), []


def submitted_tenant_id(raw: Any) -> Optional[str]:
    """tenant_id on its own, for submissions whose other fields failed."""
    if not isinstance(raw, Mapping):
        return None
    outcome = validate("tenant_id", raw.get("tenant_id"), FTPR_FIELD_RULES["tenant_id"])
    return outcome.value if outcome.valid else None
