from __future__ import annotations

from decimal import Decimal

from ..calculators.pricing import PriceStatus, resolve_price
from ..constants import REFERRAL_DISCOUNT
from ..domain.violations import ViolationCode
from .base import RejectIntake, Rule, RuleResult, Stage, register

D = Decimal

_REJECT_CODES = {
    PriceStatus.UNPRICED: ViolationCode.REGION_UNPRICED,
    PriceStatus.LOCKED: ViolationCode.REGION_LOCKED,
    PriceStatus.NOT_POSITIVE: ViolationCode.PRICE_NOT_POSITIVE,
}


@register
class RegionPriceRule(Rule):
    """
    Account price table lookup for the property's region.
    params:
      referral_discount: "5.00"   (flat, applied when any referral code is present)
    """

    type_name = "region_price"
    stage = Stage.PRICING

    def apply(self, ctx) -> RuleResult:
        discount = D(str(self.params.get("referral_discount", REFERRAL_DISCOUNT)))

        res = resolve_price(
            ctx.account.price_overrides,
            ctx.prop.region,
            ctx.account.referral_code,
            discount=discount,
        )
        meta = res.to_meta()

        if not res.admissible:
            raise RejectIntake(
                _REJECT_CODES.get(res.status, ViolationCode.PRICE_NOT_POSITIVE),
                res.message or "Cannot submit with an invalid price.",
                meta=meta,
            )

        ctx.state.price = res.price
        return RuleResult.applied(meta)
