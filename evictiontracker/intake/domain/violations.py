from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ViolationKind(str, Enum):
    FIELD = "FIELD"
    CROSS_FIELD = "CROSS_FIELD"
    PRICING = "PRICING"
    ELIGIBILITY = "ELIGIBILITY"
    CONTEXT = "CONTEXT"


class ViolationCode(str, Enum):
    # field level
    REQUIRED = "REQUIRED"
    INVALID_TYPE = "INVALID_TYPE"
    TOO_SHORT = "TOO_SHORT"
    TOO_LONG = "TOO_LONG"
    PATTERN_MISMATCH = "PATTERN_MISMATCH"
    INVALID_DATE = "INVALID_DATE"
    INVALID_NUMBER = "INVALID_NUMBER"
    BELOW_MINIMUM = "BELOW_MINIMUM"
    ABOVE_MAXIMUM = "ABOVE_MAXIMUM"
    MISMATCH = "MISMATCH"

    # cross-field
    AMOUNT_REQUIRED = "AMOUNT_REQUIRED"
    EVICTION_DATE_TOO_SOON = "EVICTION_DATE_TOO_SOON"

    # pricing
    REGION_UNPRICED = "REGION_UNPRICED"
    REGION_LOCKED = "REGION_LOCKED"
    PRICE_NOT_POSITIVE = "PRICE_NOT_POSITIVE"

    # eligibility
    DUPLICATE_REQUEST = "DUPLICATE_REQUEST"
    REDEMPTION_CAP_EXCEEDED = "REDEMPTION_CAP_EXCEEDED"
    DOCUMENT_REQUIRED = "DOCUMENT_REQUIRED"

    # caller context
    UNAUTHENTICATED = "UNAUTHENTICATED"
    TENANT_NOT_FOUND = "TENANT_NOT_FOUND"
    PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"
    PROPERTY_MISMATCH = "PROPERTY_MISMATCH"


@dataclass(frozen=True)
class Violation:
    """
    One user-facing reason a submission was not admitted.
    field=None marks a domain-level violation (pricing lockout, duplicate request, ...).
    """

    kind: ViolationKind
    code: ViolationCode
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "code": self.code.value,
            "kind": self.kind.value,
            "message": self.message,
        }
