from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..constants import MONEY_QUANT, REFERRAL_DISCOUNT
from ..domain.models import RegionPrice

D = Decimal


class PriceStatus(str, Enum):
    PRICED = "PRICED"
    UNPRICED = "UNPRICED"
    LOCKED = "LOCKED"
    NOT_POSITIVE = "NOT_POSITIVE"


@dataclass(frozen=True)
class PriceResolution:
    status: PriceStatus
    region: str
    price: D = D("0.00")
    base_price: Optional[D] = None
    discount: D = D("0.00")

    @property
    def admissible(self) -> bool:
        return self.status == PriceStatus.PRICED and self.price > 0

    @property
    def message(self) -> Optional[str]:
        if self.status == PriceStatus.LOCKED:
            return (
                f"Service is not currently available for {self.region} on your account. "
                "Please contact support."
            )
        if self.status == PriceStatus.UNPRICED:
            return (
                f"Pricing for {self.region} is not configured for your account. "
                "Please contact support."
            )
        if self.status == PriceStatus.NOT_POSITIVE:
            return "Cannot submit with an invalid price."
        return None

    def to_meta(self) -> Dict[str, Any]:
        return {
            "region": self.region,
            "status": self.status.value,
            "basePrice": None if self.base_price is None else str(self.base_price),
            "discount": str(self.discount),
            "price": str(self.price),
        }


def resolve_price(
    price_overrides: Optional[Mapping[str, RegionPrice]],
    region: str,
    referral_code: Optional[str],
    *,
    discount: D = REFERRAL_DISCOUNT,
) -> PriceResolution:
    """
    Per-region price for one submission.

    - no entry for the region  -> UNPRICED (price 0)
    - entry not unlocked       -> LOCKED (price 0)
    - base price, minus `discount` when any referral code is present
    - clamped at 0; exactly 0 is NOT_POSITIVE, never "free"
    """
    entry = (price_overrides or {}).get(region)
    if entry is None:
        return PriceResolution(status=PriceStatus.UNPRICED, region=region)

    if not entry.unlocked:
        return PriceResolution(
            status=PriceStatus.LOCKED, region=region, base_price=entry.price
        )

    base = D(str(entry.price)).quantize(MONEY_QUANT)
    applied = D("0.00")
    if referral_code and str(referral_code).strip():
        applied = D(str(discount)).quantize(MONEY_QUANT)

    price = max(D("0.00"), base - applied).quantize(MONEY_QUANT)
    status = PriceStatus.PRICED if price > 0 else PriceStatus.NOT_POSITIVE

    return PriceResolution(
        status=status, region=region, price=price, base_price=base, discount=applied
    )
