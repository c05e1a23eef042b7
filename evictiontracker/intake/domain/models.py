from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..constants import FLAG_TRUE_STRINGS

D = Decimal


class PropertyType(str, Enum):
    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"
    GARAGE = "Garage"  # legacy records only

    @classmethod
    def from_string(cls, value: Any) -> Optional["PropertyType"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalised = value.strip().lower()
        for pt in cls:
            if pt.value.lower() == normalised or pt.name.lower() == normalised:
                return pt
        return None


class CaseStatus(str, Enum):
    NOTICE_DRAFT = "Notice Draft"
    SUBMITTED = "Submitted"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"


class PaymentStatus(str, Enum):
    UNPAID = "Unpaid"
    PENDING_PAYMENT = "Pending Payment"
    PAID = "Paid"
    FAILED = "Payment Failed"
    REFUNDED = "Refunded"


def _normalise_status(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    text = str(value or "").strip().lower()
    return " ".join(text.replace("_", " ").replace("-", " ").split())


def _flag(value: Any) -> bool:
    """Catalog booleans arrive as bools, 0/1 or "true"/"yes" strings; anything else is False."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in FLAG_TRUE_STRINGS
    return False


def _money_or_none(value: Any) -> Optional[D]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        amount = D(str(value))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


@dataclass(frozen=True)
class Property:
    property_id: str
    region: str  # county
    property_type: Optional[PropertyType] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Property":
        return cls(
            property_id=str(d["property_id"]),
            region=str(d.get("region") or d.get("county") or ""),
            property_type=PropertyType.from_string(d.get("property_type")),
        )


@dataclass(frozen=True)
class Tenant:
    tenant_id: str
    property_id: str
    is_subsidized: bool = False
    subsidy_type: Optional[str] = None
    rent_amount: Optional[D] = None  # monthly

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Tenant":
        subsidy = d.get("subsidy_type")
        return cls(
            tenant_id=str(d["tenant_id"]),
            property_id=str(d.get("property_id") or ""),
            is_subsidized=_flag(d.get("is_subsidized")),
            subsidy_type=str(subsidy) if subsidy else None,
            rent_amount=_money_or_none(d.get("rent_amount")),
        )


@dataclass(frozen=True)
class RegionPrice:
    price: D
    unlocked: bool = False


@dataclass(frozen=True)
class Account:
    """Landlord account snapshot. Only the pricing-relevant fields."""

    landlord_id: str
    price_overrides: Optional[Dict[str, RegionPrice]] = None
    referral_code: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Account":
        raw = d.get("price_overrides")
        overrides: Optional[Dict[str, RegionPrice]] = None
        if raw is not None:
            overrides = {}
            for region, entry in dict(raw).items():
                price = _money_or_none((entry or {}).get("price"))
                overrides[str(region)] = RegionPrice(
                    price=price if price is not None else D("0"),
                    unlocked=_flag((entry or {}).get("unlocked")),
                )
        return cls(
            landlord_id=str(d["landlord_id"]),
            price_overrides=overrides,
            referral_code=d.get("referral_code") or None,
        )


@dataclass(frozen=True)
class ExistingCase:
    tenant_id: str
    payment_status: str
    status: str
    case_id: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return _normalise_status(self.payment_status) == "paid"

    @property
    def is_complete(self) -> bool:
        return _normalise_status(self.status) == "complete"

    @property
    def is_draft(self) -> bool:
        return _normalise_status(self.status) in ("notice draft", "draft")

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ExistingCase":
        return cls(
            tenant_id=str(d["tenant_id"]),
            payment_status=_normalise_status(d.get("payment_status")),
            status=_normalise_status(d.get("status")),
            case_id=d.get("case_id"),
        )


@dataclass(frozen=True)
class CaseLedger:
    cases: tuple[ExistingCase, ...] = field(default_factory=tuple)

    def for_tenant(self, tenant_id: str) -> tuple[ExistingCase, ...]:
        return tuple(c for c in self.cases if c.tenant_id == tenant_id)
